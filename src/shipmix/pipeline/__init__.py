"""
pipeline module

Batch driver tying validation, per-carrier optimization, cross-carrier
selection and result merging together.
"""

from .assignment import run_assignment

__all__ = [
    'run_assignment',
]
