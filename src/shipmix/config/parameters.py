from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union
import yaml

OPTIMIZERS = ('enumerate', 'milp')
PARALLEL_BACKENDS = ('loky', 'threading', 'multiprocessing', 'sequential')
OUTPUT_FORMATS = ('excel', 'json', 'csv')


@dataclass
class Parameters:
    """Configuration parameters for a batch assignment run"""
    carrier_rank: Union[Dict[str, int], List[str]]
    optimizer: str = 'enumerate'
    n_jobs: int = 1
    parallel_backend: str = 'loky'
    fail_on_unassigned: bool = False
    orders_file: str = 'orders.csv'
    services_file: str = 'services.csv'
    format: str = 'excel'

    @classmethod
    def from_yaml(cls, path: Path | str = None) -> 'Parameters':
        """Load parameters from YAML file"""
        if path is None:
            path = Path(__file__).parent / 'default_config.yaml'

        with open(path) as f:
            data = yaml.safe_load(f) or {}
            return cls(**data)

    def __post_init__(self):
        """Validate parameters after initialization"""
        self.carrier_rank = _normalize_carrier_rank(self.carrier_rank)

        if self.optimizer not in OPTIMIZERS:
            raise ValueError(
                f"optimizer must be one of {OPTIMIZERS}. Got: {self.optimizer}"
            )

        if isinstance(self.n_jobs, bool) or not isinstance(self.n_jobs, int) or self.n_jobs == 0:
            raise ValueError(
                f"n_jobs must be a non-zero integer. Got: {self.n_jobs}"
            )

        if self.parallel_backend not in PARALLEL_BACKENDS:
            raise ValueError(
                f"parallel_backend must be one of {PARALLEL_BACKENDS}. Got: {self.parallel_backend}"
            )

        if not isinstance(self.fail_on_unassigned, bool):
            raise ValueError(
                f"fail_on_unassigned must be a boolean. Got: {self.fail_on_unassigned}"
            )

        if self.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"format must be one of {OUTPUT_FORMATS}. Got: {self.format}"
            )


def _normalize_carrier_rank(carrier_rank) -> Dict[str, int]:
    """Turn a rank mapping or an ordered carrier list into {carrier: rank}.

    An ordered list ``['fedex', 'usps']`` becomes ``{'fedex': 1, 'usps': 2}``.
    Carrier names are lower-cased; ranks must be distinct positive integers so
    that the tie-break is a total order.
    """
    if isinstance(carrier_rank, (list, tuple)):
        carrier_rank = {carrier: rank for rank, carrier in enumerate(carrier_rank, start=1)}

    if not isinstance(carrier_rank, dict) or not carrier_rank:
        raise ValueError(
            f"carrier_rank must be a non-empty mapping or list. Got: {carrier_rank}"
        )

    ranks = {}
    for carrier, rank in carrier_rank.items():
        name = str(carrier).strip().lower()
        if not name:
            raise ValueError("carrier_rank contains an empty carrier name")
        if name in ranks:
            raise ValueError(f"carrier_rank lists carrier {name!r} more than once")
        if isinstance(rank, bool) or not isinstance(rank, int) or rank <= 0:
            raise ValueError(
                f"carrier_rank for {name!r} must be a positive integer. Got: {rank}"
            )
        ranks[name] = rank

    if len(set(ranks.values())) != len(ranks):
        raise ValueError(
            f"carrier_rank values must be unique to break ties. Got: {ranks}"
        )

    return ranks
