"""Prometheus metrics for trustledger.

Gate decisions, ledger growth and eviction, and telemetry delivery.
"""

from prometheus_client import Counter, Histogram

GATE_DECISIONS = Counter(
    "trustledger_gate_decisions_total",
    "Permission gate decisions",
    labelnames=["action", "outcome"],
)

GATE_LATENCY = Histogram(
    "trustledger_gate_latency_seconds",
    "Time spent awaiting a permission gate decision",
    labelnames=["action"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

MUTATIONS = Counter(
    "trustledger_mutations_total",
    "Guarded mutations by domain and status",
    labelnames=["domain", "action", "status"],
)

AUDIT_ENTRIES = Counter(
    "trustledger_audit_entries_total",
    "Audit entries appended",
    labelnames=["domain", "escalate"],
)

AUDIT_EVICTIONS = Counter(
    "trustledger_audit_evictions_total",
    "Audit entries evicted by capacity pressure",
    labelnames=["domain"],
)

ANALYTICS_FAILURES = Counter(
    "trustledger_analytics_failures_total",
    "Telemetry events whose sink raised",
    labelnames=["event"],
)
