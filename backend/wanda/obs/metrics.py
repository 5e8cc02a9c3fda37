"""Central registry for Prometheus metrics used by the engine."""

from __future__ import annotations

from prometheus_client import Counter

TRUST_ADJUSTMENTS_TOTAL = Counter(
	"wanda_trust_adjustments_total",
	"Trust score adjustments applied to users",
	["impact"],
)

VALIDATIONS_TOTAL = Counter(
	"wanda_validations_total",
	"Community validations recorded on posts",
	["type"],
)

POST_TRANSITIONS_TOTAL = Counter(
	"wanda_post_transitions_total",
	"Post status transitions decided by the engine",
	["transition"],
)

REPORTS_TOTAL = Counter(
	"wanda_reports_total",
	"Abuse reports submitted",
	["reason"],
)

REPORT_DECISIONS_TOTAL = Counter(
	"wanda_report_decisions_total",
	"Moderator decisions on reports",
	["decision"],
)

SYNC_POSTS_TOTAL = Counter(
	"wanda_sync_posts_total",
	"External posts processed by inbound sync",
	["source", "outcome"],
)

DOMAIN_ERRORS_TOTAL = Counter(
	"wanda_domain_errors_total",
	"Unexpected failures wrapped into domain errors",
	["kind"],
)


def record_transition(transition: str) -> None:
	POST_TRANSITIONS_TOTAL.labels(transition=transition).inc()


def record_wrapped_error(kind: str) -> None:
	DOMAIN_ERRORS_TOTAL.labels(kind=kind).inc()
