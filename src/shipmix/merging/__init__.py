"""
merging module

Joins the final carrier/service assignment back onto the order records.
"""

from .core import merge_assignments

__all__ = [
    'merge_assignments',
]
