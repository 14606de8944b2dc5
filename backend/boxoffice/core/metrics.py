"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at the /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total seat commit attempts',
    ['status']  # success, conflict, error
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Seat commit latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

seats_reserved = Counter(
    'seats_reserved_total',
    'Seats durably reserved'
)

# Queue ticket metrics
tickets_issued = Counter(
    'tickets_issued_total',
    'Queue tickets issued'
)

ticket_retries = Counter(
    'ticket_retry_attempts_total',
    'Ticket issuance retries caused by a duplicate ticket code'
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str, seat_count: int = 0):
    """Record a commit attempt. Status: success, conflict, error"""
    booking_attempts.labels(status=status).inc()
    if status == "success" and seat_count:
        seats_reserved.inc(seat_count)


def record_ticket_issued(retries: int = 0):
    tickets_issued.inc()
    if retries:
        ticket_retries.inc(retries)


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
