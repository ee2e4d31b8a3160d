"""
Carrier service optimizer.

Selects, for one order and one carrier's service catalog, the cheapest service
type that delivers in time and covers the distance. The problem is the binary
program

    min   sum_s cost_s * x_s
    s.t.  sum_s x_s = 1
          sum_s days_in_transit_s * x_s <= days_to_deliver
          sum_s total_miles_s * x_s     >= distance_to_destination_mi
          x_s in {0, 1}

Because exactly one x_s is non-zero, both constraints reduce to per-service
checks and the objective to a minimum over the feasible services. The default
``enumerate`` backend scans the catalog directly; the ``milp`` backend builds
the model above with PuLP and is kept as an equivalence reference.
"""

import logging
from typing import Dict, Optional, Tuple

import pandas as pd
import pulp

from shipmix.models import InfeasibilityReason, ServiceSelection
from shipmix.utils.solver import pick_solver

logger = logging.getLogger(__name__)

COST_TOLERANCE = 1e-9


def solve_carrier_problem(
    order: pd.Series,
    services_df: pd.DataFrame,
    backend: str = 'enumerate',
    solver=None,
    presorted: bool = False
) -> Optional[ServiceSelection]:
    """
    Pick the minimum-cost feasible service type of one carrier for one order.

    Args:
        order: Order record with ``days_to_deliver`` and
            ``distance_to_destination_mi``.
        services_df: Service options of a single carrier.
        backend: ``'enumerate'`` or ``'milp'``.
        solver: Optional PuLP solver for the ``milp`` backend.
        presorted: Skip canonical sorting when the caller already ran
            ``canonical_services`` on the catalog.

    Returns:
        ServiceSelection with the chosen service type and its cost, or None
        when no service satisfies both constraints.
    """
    services = services_df if presorted else canonical_services(services_df)
    if services.empty:
        return None

    if backend == 'enumerate':
        return _enumerate_services(order, services)
    if backend == 'milp':
        return _solve_milp(order, services, solver=solver)
    raise ValueError(f"Unknown optimizer backend: {backend!r}")


def canonical_services(services_df: pd.DataFrame) -> pd.DataFrame:
    """
    Order a carrier's catalog by ``service_type`` with a stable sort.

    Ties on cost are resolved by position in this order, so the selection does
    not depend on how the catalog rows were supplied.
    """
    return services_df.sort_values('service_type', kind='mergesort').reset_index(drop=True)


def feasible_mask(order: pd.Series, services: pd.DataFrame) -> pd.Series:
    """Boolean mask of services meeting both the transit-time and distance constraints."""
    in_time = services['days_in_transit'] <= order['days_to_deliver']
    far_enough = services['total_miles'] >= order['distance_to_destination_mi']
    return in_time & far_enough


def infeasibility_reason(order: pd.Series, services: pd.DataFrame) -> InfeasibilityReason:
    """Explain why no service of a carrier can serve the order."""
    if services.empty:
        return InfeasibilityReason.NO_SERVICES
    if not (services['days_in_transit'] <= order['days_to_deliver']).any():
        return InfeasibilityReason.TRANSIT_TIME
    if not (services['total_miles'] >= order['distance_to_destination_mi']).any():
        return InfeasibilityReason.DISTANCE
    return InfeasibilityReason.NO_SINGLE_SERVICE


def _enumerate_services(order: pd.Series, services: pd.DataFrame) -> Optional[ServiceSelection]:
    feasible = services[feasible_mask(order, services)]
    if feasible.empty:
        return None

    # idxmin returns the first occurrence of the minimum
    best = feasible.loc[feasible['cost_per_package'].idxmin()]
    return ServiceSelection(
        service_type=best['service_type'],
        cost=best['cost_per_package']
    )


def _solve_milp(order: pd.Series, services: pd.DataFrame, solver=None) -> Optional[ServiceSelection]:
    model, x_vars = _create_model(order, services)

    solver = solver or pick_solver()
    model.solve(solver)

    if model.status != pulp.LpStatusOptimal:
        logger.debug(
            f"Order {order.get('order_id')}: MILP status {pulp.LpStatus[model.status]}"
        )
        return None

    return _extract_selection(order, services, x_vars)


def _create_model(
    order: pd.Series,
    services: pd.DataFrame
) -> Tuple[pulp.LpProblem, Dict[int, pulp.LpVariable]]:
    """
    Build the single-order service selection model.

    Variables are keyed by the positional index of the service in
    ``services``.
    """
    model = pulp.LpProblem("Service_Selection", pulp.LpMinimize)

    x_vars = {
        s: pulp.LpVariable(f"x_{s}", cat='Binary')
        for s in range(len(services))
    }
    cost = services['cost_per_package'].tolist()
    days = services['days_in_transit'].tolist()
    miles = services['total_miles'].tolist()

    # Objective
    model += pulp.lpSum(cost[s] * x_vars[s] for s in x_vars), "Total_Cost"

    # 1. Exactly one service
    model += pulp.lpSum(x_vars.values()) == 1, "Select_One"

    # 2. Transit time
    model += (
        pulp.lpSum(days[s] * x_vars[s] for s in x_vars) <= float(order['days_to_deliver'])
    ), "Transit_Time"

    # 3. Distance
    model += (
        pulp.lpSum(miles[s] * x_vars[s] for s in x_vars) >= float(order['distance_to_destination_mi'])
    ), "Distance"

    return model, x_vars


def _extract_selection(
    order: pd.Series,
    services: pd.DataFrame,
    x_vars: Dict[int, pulp.LpVariable]
) -> Optional[ServiceSelection]:
    """
    Read the chosen service off the solved variables.

    The solver may return any of several equal-cost optima; the first feasible
    service in catalog order at the optimal cost is reported instead.
    """
    chosen = [s for s, var in x_vars.items() if var.varValue and var.varValue > 0.5]
    if len(chosen) != 1:
        logger.warning(f"MILP returned {len(chosen)} selected services, expected exactly 1")
        return None

    optimal_cost = services.iloc[chosen[0]]['cost_per_package']
    at_optimum = (services['cost_per_package'] - optimal_cost).abs() <= COST_TOLERANCE
    tied = (at_optimum & feasible_mask(order, services)).to_numpy().nonzero()[0]
    best = services.iloc[tied[0] if len(tied) else chosen[0]]
    return ServiceSelection(
        service_type=best['service_type'],
        cost=best['cost_per_package']
    )
