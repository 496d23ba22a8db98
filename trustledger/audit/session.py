"""Ambient session context read by audit ledgers.

The login component establishes the role and staff identifier once per
session. Ledgers only read it. A context variable keeps concurrent
sessions (and the background tasks they spawn) apart.
"""

from contextvars import ContextVar, Token

import structlog
from pydantic import BaseModel, ConfigDict


class SessionContext(BaseModel):
    """Who is operating the application right now."""

    model_config = ConfigDict(frozen=True)

    role: str | None = None
    staff_id: str | None = None


ANONYMOUS = SessionContext()

_current_session: ContextVar[SessionContext] = ContextVar(
    "trustledger_session", default=ANONYMOUS
)


def start_session(role: str | None = None, staff_id: str | None = None) -> Token[SessionContext]:
    """Establish the session context for the current task and its children.

    Returns:
        Token that `end_session` uses to restore the previous context
    """
    session = SessionContext(role=role, staff_id=staff_id)
    structlog.contextvars.bind_contextvars(role=role, staff_id=staff_id)
    return _current_session.set(session)


def end_session(token: Token[SessionContext] | None = None) -> None:
    """Drop the session context established by `start_session`."""
    if token is not None:
        _current_session.reset(token)
    else:
        _current_session.set(ANONYMOUS)
    structlog.contextvars.unbind_contextvars("role", "staff_id")


def current_session() -> SessionContext:
    """Return the session context visible to the current task."""
    return _current_session.get()
