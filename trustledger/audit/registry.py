"""Registry holding one audit ledger per entity domain."""

from collections.abc import Iterable

from trustledger.audit.ledger import AuditLedger
from trustledger.config.models.audit import AuditConfig
from trustledger.exceptions import UnknownLedgerError


class LedgerRegistry:
    """Process-lifetime home of the per-domain audit ledgers.

    Ledgers are created lazily with the configured capacity and
    escalation keywords.
    """

    def __init__(
        self,
        config: AuditConfig | None = None,
        domains: Iterable[str] = (),
    ) -> None:
        self._config = config or AuditConfig()
        self._ledgers: dict[str, AuditLedger] = {}
        for domain in domains:
            self.get(domain)

    def get(self, domain: str) -> AuditLedger:
        """Get the ledger for a domain, creating it on first use."""
        ledger = self._ledgers.get(domain)
        if ledger is None:
            ledger = self._ledgers.setdefault(
                domain,
                AuditLedger(
                    domain,
                    capacity=self._config.capacity,
                    context_label=domain.replace("_", " ").title().replace(" ", ""),
                    escalation_keywords=self._config.escalation_keywords,
                    max_detail_length=self._config.max_detail_length,
                ),
            )
        return ledger

    def lookup(self, domain: str) -> AuditLedger:
        """Get an existing ledger without creating one.

        Raises:
            UnknownLedgerError: If no ledger exists for the domain
        """
        try:
            return self._ledgers[domain]
        except KeyError:
            raise UnknownLedgerError(domain) from None

    def domains(self) -> list[str]:
        return sorted(self._ledgers)

    async def clear_all(self) -> None:
        for ledger in self._ledgers.values():
            await ledger.clear()
