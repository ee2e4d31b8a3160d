"""
Command-line entry point: load prepared orders and services, assign carriers,
save the results.
"""
import logging
import sys
import time

from shipmix.exceptions import ShipmixError
from shipmix.pipeline import run_assignment
from shipmix.utils.cli import load_parameters, parse_args, print_parameter_help
from shipmix.utils.data_processing import load_orders, load_services
from shipmix.utils.logging import Colors, ProgressTracker, setup_logging
from shipmix.utils.save_results import save_assignment_results
from shipmix.utils.solver import pick_solver

logger = logging.getLogger(__name__)


def main():
    """Run the carrier assignment pipeline."""
    parser = parse_args()
    args = parser.parse_args()

    if args.help_params:
        print_parameter_help()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        params = load_parameters(args)
        solver = pick_solver(verbose=args.verbose) if params.optimizer == 'milp' else None
    except (ValueError, TypeError) as e:
        parser.error(f"Invalid configuration: {e}")

    steps = [
        'Load Data',
        'Assign Carriers',
        'Save Results'
    ]
    progress = ProgressTracker(steps)
    start_time = time.time()

    try:
        orders_df = load_orders(params.orders_file)
        services_df = load_services(params.services_file)
    except FileNotFoundError as e:
        progress.advance(f"Could not load input: {e}", status='error')
        progress.pbar.close()
        sys.exit(1)
    progress.advance(
        f"Loaded {Colors.BOLD}{len(orders_df)}{Colors.RESET} orders and "
        f"{Colors.BOLD}{len(services_df)}{Colors.RESET} service options"
    )

    try:
        solution = run_assignment(
            orders_df, services_df, params, verbose=args.verbose, solver=solver
        )
    except ShipmixError as e:
        progress.advance(str(e), status='error')
        progress.pbar.close()
        sys.exit(1)

    status = 'warning' if solution['orders_unassigned'] or solution['orders_rejected'] else 'success'
    progress.advance(
        f"Assigned {Colors.BOLD}{solution['orders_assigned']}{Colors.RESET} orders for "
        f"{Colors.BOLD}${solution['total_shipping_cost']:,.2f}{Colors.RESET} "
        f"({solution['orders_unassigned']} unassigned, {solution['orders_rejected']} rejected)",
        status=status
    )

    results_path = save_assignment_results(
        solution,
        params,
        filename=args.output,
        format=params.format
    )
    progress.advance(
        f"Results saved to {results_path} "
        f"{Colors.GRAY}(execution time: {time.time() - start_time:.1f}s){Colors.RESET}"
    )
    progress.close()


if __name__ == "__main__":
    main()
