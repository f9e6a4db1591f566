"""Prometheus metrics for monitoring recommendations, leave usage and request latency"""

from prometheus_client import Counter, Histogram
from attend75.domain.models import AttendanceProjection

# Projection metrics
projection_counter = Counter(
    "attend75_projection_total",
    "Total attendance projections computed",
    ["action"],  # attend | bunk
)

leaves_applied_counter = Counter(
    "attend75_leaves_applied_total",
    "Leave credits applied to effective attendance",
    ["leave_type"],  # medical | duty
)

target_met_counter = Counter(
    "attend75_target_met_total",
    "Projections whose effective attendance already meets the target",
)

# Input metrics
validation_failure_counter = Counter(
    "attend75_validation_failures_total",
    "Form submissions rejected by validation",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(projection: AttendanceProjection) -> None:
    """Record projection metrics for monitoring recommendation mix and leave usage"""
    projection_counter.labels(action=projection.recommendation.action).inc()

    for leave in projection.leaves:
        if leave.applied > 0:
            leaves_applied_counter.labels(leave_type=leave.leave_type).inc(leave.applied)

    if projection.target_met:
        target_met_counter.inc()
