"""Prometheus metrics for the grid core.

Exposes:
- grid_mutations_total: Mutations by operation and outcome
- grid_mutation_duration_seconds: Time spent in remote mutation requests
- grid_nested_object_loads_total: Nested object loads by object and outcome
- grid_variable_writes_total: Batched variable location updates by origin
- grid_filter_syncs_total: Filter recomputations by trigger
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# ============================================================================
# Counter Metrics (Cumulative)
# ============================================================================

mutations_total = Counter(
    'grid_mutations_total',
    'Total number of row mutations executed',
    ['operation', 'status'],
)

nested_object_loads_total = Counter(
    'grid_nested_object_loads_total',
    'Total number of nested object loads',
    ['object_id', 'status'],
)

variable_writes_total = Counter(
    'grid_variable_writes_total',
    'Total number of batched dashboard variable updates',
    ['origin'],
)

filter_syncs_total = Counter(
    'grid_filter_syncs_total',
    'Total number of column filter recomputations',
    ['trigger'],
)


# ============================================================================
# Histogram Metrics (Distributions)
# ============================================================================

mutation_duration = Histogram(
    'grid_mutation_duration_seconds',
    'Time spent performing remote row mutations',
    ['operation'],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


# ============================================================================
# Metric Update Functions
# ============================================================================

def record_mutation(operation: str, status: str, duration_seconds: float | None = None):
    """Record one mutation outcome.

    Args:
        operation: add, update or delete
        status: success, error or skipped
        duration_seconds: Remote request duration, when a request was issued
    """
    mutations_total.labels(operation=operation, status=status).inc()
    if duration_seconds is not None:
        mutation_duration.labels(operation=operation).observe(duration_seconds)

    logger.debug(f"Recorded mutation metrics: operation={operation}, status={status}")


def record_nested_object_load(object_id: str, status: str):
    nested_object_loads_total.labels(object_id=object_id, status=status).inc()


def record_variable_write(origin: str):
    variable_writes_total.labels(origin=origin).inc()


def record_filter_sync(trigger: str):
    filter_syncs_total.labels(trigger=trigger).inc()
