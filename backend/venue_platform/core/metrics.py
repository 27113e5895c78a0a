"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'appointment_booking_attempts_total',
    'Total appointment booking attempts',
    ['status']  # success, conflict, rejected
)

booking_latency = Histogram(
    'appointment_booking_latency_seconds',
    'Appointment booking request latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

status_transitions = Counter(
    'appointment_status_transitions_total',
    'Appointment status transitions applied through the API',
    ['from_status', 'to_status']
)

# Sweeper metrics
sweeper_runs = Counter(
    'appointment_sweeper_runs_total',
    'Completion sweeper passes',
    ['result']  # ok, error
)

sweeper_completed = Counter(
    'appointment_sweeper_completed_total',
    'Appointments promoted to completed by the sweeper'
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)

# HTTP metrics, labelled by route template (/api/venues/{venue_id}), never the raw path
http_requests = Counter(
    'http_requests_total',
    'HTTP requests handled',
    ['method', 'route', 'status_code']
)

http_request_latency = Histogram(
    'http_request_latency_seconds',
    'HTTP request latency',
    ['route'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str):
    """Record booking attempt. Status: success, conflict, rejected"""
    booking_attempts.labels(status=status).inc()


def record_status_transition(from_status: str, to_status: str):
    status_transitions.labels(from_status=from_status, to_status=to_status).inc()


def record_sweeper_run(completed: int | None):
    """Record a sweeper pass. None means the pass failed."""
    if completed is None:
        sweeper_runs.labels(result="error").inc()
        return
    sweeper_runs.labels(result="ok").inc()
    if completed:
        sweeper_completed.inc(completed)


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()


def record_http_request(method: str, route: str, status_code: int, seconds: float):
    http_requests.labels(method=method, route=route, status_code=str(status_code)).inc()
    http_request_latency.labels(route=route).observe(seconds)
