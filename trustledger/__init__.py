"""trustledger: permission-gated, audited mutations for business entities.

Every state-changing operation on a business entity is authorized by a
pluggable gate, reported to telemetry, and appended to a bounded audit
ledger for its domain.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
