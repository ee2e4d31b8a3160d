"""
Utility helpers for shipmix.

This sub-package groups together components that sit around the core
assignment logic:

- Command-line interface helpers (`cli.py`).
- File I/O and upstream data preparation (`data_processing.py`, `save_results.py`).
- Record validation (`validation.py`).
- Logging colour codes and progress bars (`logging.py`).
- Solver adapter for the MILP backend (`solver.py`).
"""

from .project_root import PROJECT_ROOT, get_project_root

__all__ = [
    "PROJECT_ROOT",
    "get_project_root"
]
