"""Prometheus metrics for ledger activity and request latency"""

from prometheus_client import Counter, Histogram, Gauge

# Ledger metrics
transaction_counter = Counter(
    "cash_transactions_total",
    "Total transactions recorded",
    ["kind"],  # cash | card | transfer
)

balance_gauge = Gauge(
    "cash_balance",
    "Current running cash balance in minor currency units",
)

lookup_miss_counter = Counter(
    "cash_lookup_misses_total",
    "Lookups by identifier that matched no transaction",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transaction(kind: str, balance: int) -> None:
    """Count a recorded transaction and publish the resulting balance"""
    transaction_counter.labels(kind=kind).inc()
    balance_gauge.set(balance)
