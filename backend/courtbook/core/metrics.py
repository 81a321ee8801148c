"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total booking attempts',
    ['status']  # created, conflict, invalid
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Booking creation latency including the availability re-check',
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

booking_transitions = Counter(
    'booking_transitions_total',
    'Booking status transitions',
    ['transition']  # cancelled, confirmed, rejected, noop, invalid, not_found
)

# Quoting metrics
availability_checks = Counter(
    'availability_checks_total',
    'Availability checks by result',
    ['result']  # available, coach_blocked, court_booked, coach_booked
)

price_quotes = Counter(
    'price_quotes_total',
    'Price computations',
    ['peak', 'weekend']
)

# Coach metrics
blackout_toggles = Counter(
    'coach_blackout_toggles_total',
    'Coach blackout slot toggles',
    ['action']  # blocked, unblocked
)

# Store metrics
store_operations = Counter(
    'booking_store_operations_total',
    'Booking store operations',
    ['operation']  # read, write
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str):
    """Record booking attempt. Status: created, conflict, invalid"""
    booking_attempts.labels(status=status).inc()


def record_transition(transition: str):
    booking_transitions.labels(transition=transition).inc()


def record_availability_check(result: str):
    availability_checks.labels(result=result).inc()


def record_price_quote(is_peak: bool, is_weekend: bool):
    price_quotes.labels(peak=str(is_peak).lower(), weekend=str(is_weekend).lower()).inc()


def record_blackout_toggle(blocked: bool):
    action = "blocked" if blocked else "unblocked"
    blackout_toggles.labels(action=action).inc()


def record_store_operation(operation: str):
    """Record store operation. Operation: read, write"""
    store_operations.labels(operation=operation).inc()
