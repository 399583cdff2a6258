"""
Name: Prometheus Metrics

Responsibilities:
  - Define and expose Prometheus metrics
  - Provide /metrics endpoint payload
  - Record request latency/count, login outcomes and leave transitions

Collaborators:
  - middleware.py: Records request metrics
  - application/use_cases: login outcomes, leave status transitions

Constraints:
  - Low cardinality labels only (endpoint, method, status, outcome - NOT username)

Notes:
  - Metrics live in a private registry so tests can import the module freely
"""

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "intern_api_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

# Buckets: 10ms .. 10s
_request_latency = Histogram(
    "intern_api_request_latency_seconds",
    "HTTP request latency in seconds",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

_login_attempts = Counter(
    "intern_api_login_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
    registry=_registry,
)

_leave_transitions = Counter(
    "intern_api_leave_transitions_total",
    "Leave request status changes",
    ["status"],
    registry=_registry,
)

LOGIN_OUTCOMES = ("success", "invalid_credentials", "missing_fields", "locked_out")


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """
    R: Record HTTP request metrics.

    Args:
        endpoint: Request path (e.g., "/api/leave/approve/12")
        method: HTTP method (e.g., "PUT")
        status_code: Response status code
        latency_seconds: Request duration in seconds
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_login_outcome(outcome: str) -> None:
    if outcome not in LOGIN_OUTCOMES:
        raise ValueError(f"Unknown login outcome: {outcome}")
    _login_attempts.labels(outcome=outcome).inc()


def record_leave_transition(status: str) -> None:
    _leave_transitions.labels(status=status).inc()


def _normalize_endpoint(path: str) -> str:
    """
    R: Normalize endpoint path to prevent high cardinality.

    Replaces numeric IDs and attachment filenames with placeholders.
    """
    path = re.sub(r"/attachment/[^/]+$", "/attachment/{filename}", path)
    return re.sub(r"/\d+", "/{id}", path)


def _status_bucket(code: int) -> str:
    """R: Bucket status code (2xx, 4xx, 5xx)."""
    if 200 <= code < 300:
        return "2xx"
    elif 400 <= code < 500:
        return "4xx"
    elif 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """R: Generate Prometheus metrics payload and content type."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
