"""API exception hierarchy.

Every API exception carries the status code and error code the global
handler renders into an ErrorResponse.
"""

from trustledger.api.models.errors import ErrorCode


class TrustLedgerAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LedgerNotFoundError(TrustLedgerAPIError):
    """Raised when a domain has no audit ledger."""

    status_code = 404
    error_code = ErrorCode.LEDGER_NOT_FOUND
