"""
optimization module

This module provides the per-(order, carrier) service selection: the cheapest
service type of one carrier meeting an order's transit-time and distance
constraints.
"""

# Re-export public functions from core
from .core import (
    solve_carrier_problem,
    canonical_services,
    feasible_mask,
    infeasibility_reason,
    _create_model,
    _extract_selection,
)

__all__ = [
    'solve_carrier_problem',
    'canonical_services',
    'feasible_mask',
    'infeasibility_reason',
    '_create_model',
    '_extract_selection',
]
