"""Configure-once runtime holding the process-wide collaborators."""

from trustledger.runtime.container import (
    DOMAINS,
    Runtime,
    configure_runtime,
    get_runtime,
    reset_runtime,
)

__all__ = [
    "DOMAINS",
    "Runtime",
    "configure_runtime",
    "get_runtime",
    "reset_runtime",
]
