import pandas as pd

from shipmix.aggregation import aggregate_carrier, carrier_catalog
from shipmix.models import CANDIDATE_COLUMNS, INFEASIBLE_COLUMNS


def test_every_order_processed_exactly_once(toy_orders, toy_services):
    for carrier in ('fedex', 'usps', 'ups'):
        result = aggregate_carrier(toy_orders, toy_services, carrier)
        ids = list(result.candidates['order_id']) + list(result.infeasible['order_id'])
        assert sorted(ids) == sorted(toy_orders['order_id'])
        assert result.num_orders == len(toy_orders)


def test_usps_candidates_and_markers(toy_orders, toy_services):
    result = aggregate_carrier(toy_orders, toy_services, 'usps')

    assert list(result.candidates.columns) == CANDIDATE_COLUMNS
    assert list(result.infeasible.columns) == INFEASIBLE_COLUMNS

    assert result.candidates.to_dict(orient='records') == [
        {'order_id': 'A', 'delivery_service': 'usps', 'service_type': 'priority', 'cost': 8},
    ]
    markers = result.infeasible.set_index('order_id')['reason'].to_dict()
    assert markers == {'B': 'no_single_service', 'C': 'transit_time'}


def test_candidates_keep_order_input_order(toy_services):
    orders = pd.DataFrame([
        {'order_id': oid, 'days_to_deliver': 5, 'distance_to_destination_mi': 100.0}
        for oid in ['z', 'a', 'm']
    ])
    result = aggregate_carrier(orders, toy_services, 'fedex')
    assert list(result.candidates['order_id']) == ['z', 'a', 'm']
    assert result.infeasible.empty


def test_unknown_carrier_has_no_services(toy_orders, toy_services):
    result = aggregate_carrier(toy_orders, toy_services, 'dhl')
    assert result.candidates.empty
    assert set(result.infeasible['reason']) == {'no_services'}


def test_candidates_satisfy_both_constraints(toy_orders, toy_services):
    for carrier in ('fedex', 'usps', 'ups'):
        result = aggregate_carrier(toy_orders, toy_services, carrier)
        catalog = carrier_catalog(toy_services, carrier).set_index('service_type')
        orders = toy_orders.set_index('order_id')
        for _, cand in result.candidates.iterrows():
            service = catalog.loc[cand['service_type']]
            order = orders.loc[cand['order_id']]
            assert service['days_in_transit'] <= order['days_to_deliver']
            assert service['total_miles'] >= order['distance_to_destination_mi']


def test_milp_backend_agrees(toy_orders, toy_services):
    for carrier in ('fedex', 'usps', 'ups'):
        enum = aggregate_carrier(toy_orders, toy_services, carrier, backend='enumerate')
        milp = aggregate_carrier(toy_orders, toy_services, carrier, backend='milp')
        pd.testing.assert_frame_equal(enum.candidates, milp.candidates)
        pd.testing.assert_frame_equal(enum.infeasible, milp.infeasible)
