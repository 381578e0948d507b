"""Process entry point - bind to SERVICE_ADDR_CASH and serve until interrupted"""

import logging
import sys

import uvicorn

from cash_ledger.api.main import app
from cash_ledger.config import settings

logger = logging.getLogger(__name__)


def parse_bind_address(address: str) -> tuple[str, int]:
    """
    Split "host:port" into its parts.

    IPv6 hosts are written in brackets, e.g. "[::1]:50051".

    Raises:
        ValueError: If the port is missing or not a number
    """
    host, sep, port = address.strip().rpartition(":")
    if not sep or not host:
        raise ValueError(f"Invalid bind address: {address}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


def main() -> int:
    host, port = parse_bind_address(settings.service_addr_cash)

    # uvicorn stops accepting on SIGINT/SIGTERM and waits for in-flight requests
    uvicorn.run(app, host=host, port=port, log_config=None)
    logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
