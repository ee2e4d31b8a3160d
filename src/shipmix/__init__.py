"""
shipmix – cheapest feasible carrier assignment

Assigns each pending order to the cheapest carrier/service combination that
delivers before the promised date and covers the distance to the destination:

1. **Optimizing** each (order, carrier) pair (`shipmix.optimization`).
2. **Aggregating** one carrier over the whole order set (`shipmix.aggregation`).
3. **Selecting** the final service per order by cost, then carrier rank (`shipmix.selection`).
4. **Merging** the assignment back onto the orders (`shipmix.merging`).

Typical high-level workflow
--------------------------
>>> from shipmix.config import Parameters
>>> from shipmix.pipeline import run_assignment
>>> solution = run_assignment(orders_df, services_df, Parameters.from_yaml())
>>> solution['assignments'][['order_id', 'delivery_service', 'service_type', 'shipping_cost']]
"""

__version__ = "0.1.0"
