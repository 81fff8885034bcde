"""Metrics module for the grid core.

Usage:
    from metrics import record_mutation

    record_mutation('update', 'success', duration_seconds=0.12)
"""

from .grid_metrics import (
    filter_syncs_total,
    mutation_duration,
    mutations_total,
    nested_object_loads_total,
    record_filter_sync,
    record_mutation,
    record_nested_object_load,
    record_variable_write,
    variable_writes_total,
)

__all__ = [
    # Counter metrics
    'mutations_total',
    'nested_object_loads_total',
    'variable_writes_total',
    'filter_syncs_total',

    # Histogram metrics
    'mutation_duration',

    # Update functions
    'record_mutation',
    'record_nested_object_load',
    'record_variable_write',
    'record_filter_sync',
]
