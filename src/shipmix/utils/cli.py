from argparse import ArgumentParser, RawTextHelpFormatter
from typing import Dict, Any
import sys

from shipmix.config.parameters import Parameters, OPTIMIZERS, PARALLEL_BACKENDS, OUTPUT_FORMATS
from shipmix.utils.logging import Colors

def print_parameter_help():
    """Display detailed help information about parameters"""
    help_text = f"""
{Colors.BOLD}Carrier Assignment Parameters{Colors.RESET}
{Colors.CYAN}═════════════════════════════{Colors.RESET}

{Colors.YELLOW}Tie-break:{Colors.RESET}
  --carrier-rank LIST      Comma-separated carriers, highest priority first.
                           Every carrier in the service file must be listed.
                           Default: Defined in config file (fedex, usps, ups)
                           Example: --carrier-rank usps,fedex,ups

{Colors.YELLOW}Optimization:{Colors.RESET}
  --optimizer STR          Service selection backend
                           Options:
                             - enumerate (direct feasibility scan)
                             - milp (PuLP binary program, CBC/Gurobi)
                           Default: enumerate
                           Example: --optimizer milp

  --n-jobs INT             Carriers optimized in parallel (-1 = all cores)
                           Default: 1
                           Example: --n-jobs 3

  --parallel-backend STR   joblib backend: loky, threading, multiprocessing, sequential
                           Default: loky

  --fail-on-unassigned     Stop with an error when an order has no feasible
                           service instead of reporting it as unassigned

{Colors.YELLOW}Input/Output:{Colors.RESET}
  --orders-file STR        Orders CSV (relative names resolve against data/)
  --services-file STR      Services CSV (relative names resolve against data/)
  --format STR             Output format: excel, json or csv
  --output PATH            Output file (default: results/assignment_results_<timestamp>)
  --config PATH            Path to custom config file
                           Default: src/shipmix/config/default_config.yaml

{Colors.YELLOW}Other Options:{Colors.RESET}
  --verbose                Enable verbose output

{Colors.CYAN}Examples:{Colors.RESET}
  # Use custom config file
  shipmix --config my_config.yaml

  # Cross-check with the MILP backend and write JSON
  shipmix --optimizer milp --format json

  # Prefer USPS on cost ties
  shipmix --carrier-rank usps,fedex,ups --orders-file orders_week_12.csv
"""
    print(help_text)
    sys.exit(0)

def parse_args() -> ArgumentParser:
    """Build the command line parser for parameter overrides"""
    parser = ArgumentParser(
        description='Cheapest feasible carrier assignment',
        formatter_class=RawTextHelpFormatter
    )

    parser.add_argument(
        '--help-params',
        action='store_true',
        help='Show detailed parameter information and exit'
    )

    parser.add_argument('--config', type=str, help='Path to custom config file')
    parser.add_argument('--orders-file', type=str, help='Orders CSV file')
    parser.add_argument('--services-file', type=str, help='Services CSV file')
    parser.add_argument('--optimizer', type=str, choices=OPTIMIZERS, help='Service selection backend')
    parser.add_argument('--n-jobs', type=int, help='Carriers optimized in parallel')
    parser.add_argument(
        '--parallel-backend',
        type=str,
        choices=PARALLEL_BACKENDS,
        help='joblib backend for the per-carrier fan-out'
    )
    parser.add_argument(
        '--carrier-rank',
        type=_carrier_list,
        help='Comma-separated carriers, highest tie-break priority first'
    )
    parser.add_argument(
        '--fail-on-unassigned',
        action='store_const',
        const=True,
        help='Raise an error when an order has no feasible service'
    )
    parser.add_argument('--format', type=str, choices=OUTPUT_FORMATS, help='Output file format')
    parser.add_argument('--output', type=str, help='Output file path')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    return parser

def _carrier_list(value: str) -> list:
    carriers = [c.strip() for c in value.split(',') if c.strip()]
    if not carriers:
        raise ValueError("empty carrier list")
    return carriers

def get_parameter_overrides(args) -> Dict[str, Any]:
    """Extract parameter overrides from command line arguments"""
    overrides = {k: v for k, v in vars(args).items() if v is not None}

    # Remove non-parameter arguments
    for key in ['config', 'verbose', 'help_params', 'output']:
        overrides.pop(key, None)

    overrides = {k.replace('-', '_'): v for k, v in overrides.items()}

    return overrides

def load_parameters(args) -> Parameters:
    """Load parameters with optional command line overrides"""
    if args.config:
        params = Parameters.from_yaml(args.config)
    else:
        params = Parameters.from_yaml()

    overrides = get_parameter_overrides(args)

    if overrides:
        data = params.__dict__.copy()
        data.update(overrides)
        params = Parameters(**data)

    return params
