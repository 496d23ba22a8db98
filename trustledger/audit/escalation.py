"""Escalation classifier for audit entries."""

from collections.abc import Iterable

from trustledger.config.models.audit import DEFAULT_ESCALATION_KEYWORDS

ESCALATION_KEYWORDS: frozenset[str] = frozenset(DEFAULT_ESCALATION_KEYWORDS)


def should_escalate(
    operation: str,
    detail: str = "",
    hint: bool = False,
    keywords: Iterable[str] = ESCALATION_KEYWORDS,
) -> bool:
    """Decide whether an audit entry needs elevated review.

    True when the caller asks for it, or when the operation name or the
    detail text contains any keyword, ignoring case.
    """
    if hint:
        return True
    haystack = f"{operation}\n{detail}".lower()
    return any(keyword.lower() in haystack for keyword in keywords if keyword)
