"""Permission gate configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

GateMode = Literal["allow_all", "deny_all", "roles"]


class GateConfig(BaseModel):
    """Permission gate configuration.

    The 'allow_all' mode exists for previews and tests and is rejected
    when the environment is 'production'.
    """

    mode: GateMode = Field(default="allow_all", description="Which gate to build")
    roles: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Action name -> roles allowed to perform it (mode 'roles')",
    )
    default_allow: bool = Field(
        default=False,
        description="Decision for actions missing from the role map",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deny when a gate check takes longer than this",
    )
