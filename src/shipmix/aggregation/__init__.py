"""
aggregation module

Applies the carrier service optimizer to the whole order set of one carrier,
collecting candidate assignments and explicit infeasibility markers.
"""

from .core import (
    aggregate_carrier,
    carrier_catalog,
    candidates_to_frame,
    infeasible_to_frame,
)

__all__ = [
    'aggregate_carrier',
    'carrier_catalog',
    'candidates_to_frame',
    'infeasible_to_frame',
]
