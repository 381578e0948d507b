"""Domain-specific exceptions"""


class LedgerException(Exception):
    """Base exception for ledger domain"""

    pass


class TransactionValidationError(LedgerException):
    """Request data is malformed (kind, timestamp or identifier)"""

    pass


class TransactionNotFoundError(LedgerException):
    """No stored transaction has the requested identifier"""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found: {transaction_id}")


class LedgerConsistencyError(LedgerException):
    """Stored state disagrees with what was just inserted"""

    pass
