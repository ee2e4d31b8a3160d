"""
Batch assignment pipeline.

    validate records -> check carrier ranks -> per-carrier optimization
    (joblib fan-out) -> join barrier -> best service selection -> merge

Configuration errors (unranked carriers, broken catalog) abort before any
optimization runs; malformed orders are rejected and reported; orders no
carrier can serve end up unassigned.
"""
import logging
import time
from typing import Dict, List

import pandas as pd
from joblib import Parallel, delayed

from shipmix.aggregation import aggregate_carrier
from shipmix.config.parameters import Parameters
from shipmix.exceptions import NoFeasibleService
from shipmix.merging import merge_assignments
from shipmix.models import (
    CANDIDATE_COLUMNS,
    INFEASIBLE_COLUMNS,
    SHIPPING_FIELDS,
    AssignmentStatus,
    CarrierResult,
)
from shipmix.selection import check_carrier_ranks, select_best_services
from shipmix.utils.logging import Colors, Symbols
from shipmix.utils.solver import pick_solver
from shipmix.utils.validation import validate_orders, validate_services

logger = logging.getLogger(__name__)


def run_assignment(
    orders_df: pd.DataFrame,
    services_df: pd.DataFrame,
    parameters: Parameters,
    verbose: bool = False,
    solver=None
) -> Dict:
    """
    Assign every order to its cheapest feasible carrier service.

    Args:
        orders_df: Prepared orders (``order_id``, ``distance_to_destination_mi``,
            ``days_to_deliver`` and any extra columns to carry through).
        services_df: Prepared service catalog of all carriers.
        parameters: Run configuration (carrier ranks, optimizer backend,
            parallelism, strictness).
        verbose: Log the solution summary.
        solver: PuLP solver for the ``milp`` optimizer, picked with
            ``pick_solver`` when omitted.

    Returns:
        Dictionary with the merged ``assignments`` DataFrame (every input row,
        in input order), the intermediate frames and summary statistics.

    Raises:
        InvalidServiceRecord: the service catalog is malformed.
        UnknownCarrierPriority: a carrier in the catalog has no rank.
        NoFeasibleService: ``fail_on_unassigned`` is set and some order
            cannot be served.
        ValueError: ``SHIPMIX_SOLVER`` names an unknown solver.
    """
    start_time = time.time()
    orders_df = orders_df.reset_index(drop=True)
    if parameters.optimizer == 'milp' and solver is None:
        solver = pick_solver()

    # Fail fast on configuration-like input
    services = validate_services(services_df)
    carriers = sorted(services['delivery_service'].unique())
    check_carrier_ranks(carriers, parameters.carrier_rank)

    valid_orders, rejected = validate_orders(orders_df)
    logger.info(
        f"Assigning {len(valid_orders)} orders across {len(carriers)} carriers "
        f"({parameters.optimizer} optimizer)"
    )

    carrier_results = _optimize_carriers(valid_orders, services, carriers, parameters, solver)

    candidates = _concat([r.candidates for r in carrier_results], CANDIDATE_COLUMNS)
    infeasible = _concat([r.infeasible for r in carrier_results], INFEASIBLE_COLUMNS)

    final_df = select_best_services(candidates, parameters.carrier_rank)

    assigned_ids = set(final_df['order_id'])
    unassigned = [oid for oid in valid_orders['order_id'] if oid not in assigned_ids]
    if unassigned:
        errors = [NoFeasibleService(oid) for oid in unassigned]
        if parameters.fail_on_unassigned:
            raise errors[0]
        logger.warning(f"{Symbols.CROSS} {len(unassigned)} orders have no feasible service")
        for e in errors:
            logger.debug(str(e))

    merged = merge_assignments(valid_orders, final_df)
    assignments = _restore_input_rows(merged, orders_df, rejected)

    solution = _calculate_solution_statistics(final_df, valid_orders, rejected, unassigned)
    solution.update({
        'assignments': assignments,
        'final_assignments': final_df,
        'candidates': candidates,
        'infeasible': infeasible,
        'rejected_orders': rejected.reset_index(drop=True),
        'unassigned_orders': unassigned,
        'optimizer': parameters.optimizer,
        'solver_name': solver.name if parameters.optimizer == 'milp' else 'enumeration',
        'runtime_sec': time.time() - start_time,
    })

    if verbose:
        _print_solution_details(solution)

    return solution


def _optimize_carriers(
    orders_df: pd.DataFrame,
    services_df: pd.DataFrame,
    carriers: List[str],
    parameters: Parameters,
    solver=None
) -> List[CarrierResult]:
    """Run one aggregation job per carrier; returns once every carrier is done."""
    if parameters.n_jobs == 1 or len(carriers) <= 1:
        return [
            aggregate_carrier(
                orders_df, services_df, carrier, backend=parameters.optimizer, solver=solver
            )
            for carrier in carriers
        ]

    return Parallel(n_jobs=parameters.n_jobs, backend=parameters.parallel_backend)(
        delayed(aggregate_carrier)(
            orders_df,
            services_df,
            carrier,
            backend=parameters.optimizer,
            solver=solver
        )
        for carrier in carriers
    )


def _concat(frames: List[pd.DataFrame], columns: List[str]) -> pd.DataFrame:
    frames = [f for f in frames if not f.empty]
    if not frames:
        return pd.DataFrame(columns=columns)
    return pd.concat(frames, ignore_index=True)[columns]


def _restore_input_rows(
    merged: pd.DataFrame,
    orders_df: pd.DataFrame,
    rejected: pd.DataFrame
) -> pd.DataFrame:
    """
    Rebuild the output in input order from the merged valid rows.

    Valid rows get their original ``order_id`` values back (validation keys
    on a stripped str copy) and rejected rows are put back in place with null
    shipping fields.
    """
    if 'order_id' in orders_df.columns and not merged.empty:
        merged = merged.copy()
        merged['order_id'] = orders_df.loc[merged.index, 'order_id']

    if rejected.empty:
        return merged.reset_index(drop=True)

    rejected_rows = orders_df.loc[rejected.index].drop(
        columns=[c for c in SHIPPING_FIELDS + ['assignment_status'] if c in orders_df.columns]
    )
    rejected_rows['delivery_service'] = None
    rejected_rows['service_type'] = None
    rejected_rows['shipping_cost'] = float('nan')
    rejected_rows['assignment_status'] = AssignmentStatus.REJECTED.value

    frames = [f for f in (merged, rejected_rows) if not f.empty]
    return pd.concat(frames).sort_index().reset_index(drop=True)


def _calculate_solution_statistics(
    final_df: pd.DataFrame,
    valid_orders: pd.DataFrame,
    rejected: pd.DataFrame,
    unassigned: List[str]
) -> Dict:
    """Summary figures of one run."""
    return {
        'total_shipping_cost': float(final_df['shipping_cost'].sum()) if not final_df.empty else 0.0,
        'orders_total': len(valid_orders) + len(rejected),
        'orders_assigned': len(final_df),
        'orders_unassigned': len(unassigned),
        'orders_rejected': len(rejected),
        'carriers_used': final_df['delivery_service'].value_counts().sort_index().to_dict(),
    }


def _print_solution_details(solution: Dict) -> None:
    """Log a short summary of the assignment."""
    logger.info(f"\n{Symbols.CHART} Assignment Summary")
    logger.info("=" * 50)
    logger.info(
        f"{Colors.CYAN}Total Shipping Cost: ${Colors.BOLD}"
        f"{solution['total_shipping_cost']:>10,.2f}{Colors.RESET}"
    )
    logger.info(
        f"{Colors.CYAN}Orders assigned:     {Colors.BOLD}"
        f"{solution['orders_assigned']:>10}{Colors.RESET}"
    )
    logger.info(
        f"{Colors.CYAN}Orders unassigned:   {Colors.BOLD}"
        f"{solution['orders_unassigned']:>10}{Colors.RESET}"
    )
    logger.info(
        f"{Colors.CYAN}Orders rejected:     {Colors.BOLD}"
        f"{solution['orders_rejected']:>10}{Colors.RESET}"
    )

    logger.info(f"\n{Symbols.TRUCK} Orders by Carrier")
    for carrier, count in solution['carriers_used'].items():
        logger.info(
            f"{Colors.BLUE}→ {carrier}:{Colors.BOLD}{count:>6}{Colors.RESET}"
        )

    status_counts = solution['assignments']['assignment_status'].value_counts()
    if status_counts.get(AssignmentStatus.UNASSIGNED.value, 0):
        logger.warning(
            f"{Colors.YELLOW}→ Unassigned orders: "
            f"{', '.join(map(str, solution['unassigned_orders']))}{Colors.RESET}"
        )
