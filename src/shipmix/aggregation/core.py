"""Run the carrier service optimizer over every order for one carrier."""

import logging
from typing import Iterable, List

import pandas as pd

from shipmix.models import (
    CANDIDATE_COLUMNS,
    INFEASIBLE_COLUMNS,
    CandidateAssignment,
    CarrierResult,
    InfeasibleMarker,
)
from shipmix.optimization import canonical_services, infeasibility_reason, solve_carrier_problem
from shipmix.utils.solver import pick_solver

logger = logging.getLogger(__name__)


def aggregate_carrier(
    orders_df: pd.DataFrame,
    services_df: pd.DataFrame,
    carrier: str,
    backend: str = 'enumerate',
    solver=None
) -> CarrierResult:
    """
    Solve the service selection of one carrier for every order.

    Args:
        orders_df: Validated orders, one row per ``order_id``.
        services_df: Service catalog; rows of other carriers are ignored.
        carrier: Carrier identifier (``delivery_service``).
        backend: Optimizer backend, ``'enumerate'`` or ``'milp'``.
        solver: Optional PuLP solver for the ``milp`` backend.

    Returns:
        CarrierResult whose candidates and infeasibility markers together
        cover every order exactly once, in the input order.
    """
    catalog = carrier_catalog(services_df, carrier)
    if backend == 'milp' and solver is None:
        solver = pick_solver()

    candidates: List[CandidateAssignment] = []
    infeasible: List[InfeasibleMarker] = []
    for _, order in orders_df.iterrows():
        selection = solve_carrier_problem(
            order, catalog, backend=backend, solver=solver, presorted=True
        )
        if selection is None:
            infeasible.append(InfeasibleMarker(
                order_id=order['order_id'],
                delivery_service=carrier,
                reason=infeasibility_reason(order, catalog)
            ))
        else:
            candidates.append(CandidateAssignment(
                order_id=order['order_id'],
                delivery_service=carrier,
                service_type=selection.service_type,
                cost=selection.cost
            ))

    logger.debug(
        f"Carrier {carrier}: {len(candidates)} candidates, "
        f"{len(infeasible)} infeasible orders over {len(catalog)} service types"
    )

    return CarrierResult(
        carrier=carrier,
        candidates=candidates_to_frame(candidates),
        infeasible=infeasible_to_frame(infeasible)
    )


def carrier_catalog(services_df: pd.DataFrame, carrier: str) -> pd.DataFrame:
    """Service options of a single carrier in canonical order."""
    return canonical_services(services_df[services_df['delivery_service'] == carrier])


def candidates_to_frame(candidates: Iterable[CandidateAssignment]) -> pd.DataFrame:
    rows = [
        (c.order_id, c.delivery_service, c.service_type, c.cost)
        for c in candidates
    ]
    return pd.DataFrame(rows, columns=CANDIDATE_COLUMNS)


def infeasible_to_frame(markers: Iterable[InfeasibleMarker]) -> pd.DataFrame:
    rows = [
        (m.order_id, m.delivery_service, m.reason.value)
        for m in markers
    ]
    return pd.DataFrame(rows, columns=INFEASIBLE_COLUMNS)
