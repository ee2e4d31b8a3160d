import os
import pulp

def pick_solver(verbose: bool = False):
    """
    Return a PuLP solver instance for the MILP backend.
    Priority
    1. SHIPMIX_SOLVER env-var: 'gurobi' | 'cbc' | 'auto'
    2. If 'auto' (default): try GUROBI_CMD, fall back to PULP_CBC_CMD.
    """
    choice = os.getenv("SHIPMIX_SOLVER", "auto").lower()
    msg = 1 if verbose else 0

    if choice == "gurobi":
        return pulp.GUROBI_CMD(msg=msg)
    if choice == "cbc":
        return pulp.PULP_CBC_CMD(msg=msg)
    if choice != "auto":
        raise ValueError(f"Unknown SHIPMIX_SOLVER value: {choice!r}")

    try:
        s = pulp.GUROBI_CMD(msg=msg)
        if not s.available():
            raise pulp.PulpError("gurobi_cl not found")
        return s
    except (pulp.PulpError, OSError):
        return pulp.PULP_CBC_CMD(msg=msg)
