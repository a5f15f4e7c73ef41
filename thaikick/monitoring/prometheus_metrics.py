"""
Prometheus metrics for the ThaiKick API.

Service operations decorated with @BaseService.measure_operation feed
these collectors; the metrics route renders them in exposition format.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Own registry; the default one would collide when tests re-import the app
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "thaikick_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "thaikick_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "thaikick_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

bookings_materialized_total = Counter(
    "thaikick_bookings_materialized_total",
    "Booking rows created at checkout",
    ["booking_type"],
    registry=REGISTRY,
)


slot_conflicts_total = Counter(
    "thaikick_slot_conflicts_total",
    "Private checkouts refused because the slot was already taken",
    ["source"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Thin facade so services never touch collectors directly."""

    content_type = CONTENT_TYPE_LATEST

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: str | None = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'BookingService')
            operation: Operation name (e.g., 'bookings.create')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def inc_bookings_materialized(booking_type: str, count: int) -> None:
        bookings_materialized_total.labels(booking_type=booking_type).inc(count)

    @staticmethod
    def inc_slot_conflict(source: str) -> None:
        """source is "precheck" or "constraint", whichever caught the clash."""
        slot_conflicts_total.labels(source=source).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Metrics data in Prometheus text format."""
        return generate_latest(REGISTRY)


prometheus_metrics = PrometheusMetrics()
