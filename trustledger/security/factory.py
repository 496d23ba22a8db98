"""Build the configured permission gate."""

from trustledger.config.models.gate import GateConfig
from trustledger.security.gate import (
    AllowAllGate,
    DenyAllGate,
    FailClosedGate,
    PermissionGate,
    RoleGate,
)


def create_gate(config: GateConfig) -> PermissionGate:
    """Create a fail-closed gate from configuration.

    Args:
        config: Gate settings

    Returns:
        The configured gate wrapped in FailClosedGate
    """
    inner: PermissionGate
    if config.mode == "allow_all":
        inner = AllowAllGate()
    elif config.mode == "deny_all":
        inner = DenyAllGate()
    elif config.mode == "roles":
        inner = RoleGate(config.roles, default_allow=config.default_allow)
    else:
        raise ValueError(f"Unknown gate mode: {config.mode}")

    return FailClosedGate(inner, timeout=config.timeout_seconds)
