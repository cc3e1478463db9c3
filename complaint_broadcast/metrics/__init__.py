# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metric objects for the HTTP layer and the broadcast pipeline.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "complaint_broadcast_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "complaint_broadcast_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "complaint_broadcast_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
BROADCASTS_TOTAL = Counter(
    "complaint_broadcasts_total",
    "Total broadcasts by outcome",
    ["status", "outcome"],
)
EMAILS_TOTAL = Counter(
    "complaint_broadcast_emails_total",
    "Per-recipient deliveries by role and outcome",
    ["role", "outcome"],
)
BROADCAST_DURATION = Histogram(
    "complaint_broadcast_duration_seconds",
    "Time to resolve, render and deliver one broadcast",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)
TRANSITIONS_REJECTED = Counter(
    "complaint_transitions_rejected_total",
    "Status transitions rejected by the validator",
    ["reason"],
)
HOOK_FAILURES = Counter(
    "complaint_broadcast_hook_failures_total",
    "Errors swallowed at the event hook boundary",
    ["hook"],
)
