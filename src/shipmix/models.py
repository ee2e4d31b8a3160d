from dataclasses import dataclass
from enum import Enum

import pandas as pd

# Column layouts shared across the pipeline stages
ORDER_COLUMNS = ['order_id', 'distance_to_destination_mi', 'days_to_deliver']
SERVICE_COLUMNS = [
    'delivery_service',
    'service_type',
    'cost_per_package',
    'days_in_transit',
    'total_miles',
]
CANDIDATE_COLUMNS = ['order_id', 'delivery_service', 'service_type', 'cost']
INFEASIBLE_COLUMNS = ['order_id', 'delivery_service', 'reason']
FINAL_COLUMNS = ['order_id', 'delivery_service', 'service_type', 'shipping_cost']
SHIPPING_FIELDS = ['delivery_service', 'service_type', 'shipping_cost']


class InfeasibilityReason(Enum):
    """Why a carrier cannot serve an order."""
    NO_SERVICES = "no_services"              # Carrier has an empty catalog
    TRANSIT_TIME = "transit_time"            # Every service is too slow
    DISTANCE = "distance"                    # Every service falls short on miles
    NO_SINGLE_SERVICE = "no_single_service"  # Each constraint met, never jointly


class AssignmentStatus(Enum):
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ServiceSelection:
    """The service type chosen for one (order, carrier) pair."""
    service_type: str
    cost: float


@dataclass(frozen=True)
class CandidateAssignment:
    """Cheapest feasible service of one carrier for one order."""
    order_id: str
    delivery_service: str
    service_type: str
    cost: float


@dataclass(frozen=True)
class InfeasibleMarker:
    """Explicit record that a carrier cannot serve an order."""
    order_id: str
    delivery_service: str
    reason: InfeasibilityReason


@dataclass(frozen=True)
class CarrierResult:
    """All outcomes of one carrier over the order set, in order input order."""
    carrier: str
    candidates: pd.DataFrame
    infeasible: pd.DataFrame

    @property
    def num_orders(self) -> int:
        return len(self.candidates) + len(self.infeasible)

