"""Permission gates for guarded mutations."""

from trustledger.security.factory import create_gate
from trustledger.security.gate import (
    AllowAllGate,
    DenyAllGate,
    FailClosedGate,
    PermissionGate,
    RoleGate,
)

__all__ = [
    "AllowAllGate",
    "DenyAllGate",
    "FailClosedGate",
    "PermissionGate",
    "RoleGate",
    "create_gate",
]
