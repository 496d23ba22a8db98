"""Exception hierarchy for trustledger.

Denied mutations are not errors and never raise; these exceptions cover
misconfiguration and lookups of things that do not exist.
"""


class TrustLedgerError(Exception):
    """Base exception for all trustledger errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RuntimeConfigurationError(TrustLedgerError):
    """Raised when the runtime is configured twice, not at all, or unsafely."""


class UnknownLedgerError(TrustLedgerError):
    """Raised when a ledger is requested for a domain that has none."""

    def __init__(self, domain: str) -> None:
        super().__init__(f"No audit ledger registered for domain: {domain}")
        self.domain = domain
