"""
selection module

Merges candidates from all carriers and picks one final assignment per order
by cost, breaking ties with the configured carrier rank.
"""

from .core import (
    select_best_services,
    check_carrier_ranks,
)

__all__ = [
    'select_best_services',
    'check_carrier_ranks',
]
