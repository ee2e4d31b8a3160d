import pandas as pd
import pytest

from shipmix.utils.data_processing import (
    derive_days_to_deliver,
    derive_total_miles,
    load_orders,
    load_services,
    resolve_input,
)


def test_load_orders_derives_days_to_deliver(tmp_path):
    pd.DataFrame([
        {'order_id': '007', 'date_ordered': '2024-03-01', 'promised_delivery_date': '2024-03-04',
         'distance_to_destination_mi': 120.5, 'package_cnt': 2},
        {'order_id': '008', 'date_ordered': '2024-03-01', 'promised_delivery_date': 'soon',
         'distance_to_destination_mi': 'far', 'package_cnt': 1},
    ]).to_csv(tmp_path / 'orders.csv', index=False)

    orders = load_orders(tmp_path / 'orders.csv')

    assert list(orders['order_id']) == ['007', '008']
    assert orders.loc[0, 'days_to_deliver'] == 3
    assert orders.loc[0, 'distance_to_destination_mi'] == 120.5
    # Unparseable values become nulls for validation to reject
    assert pd.isna(orders.loc[1, 'days_to_deliver'])
    assert pd.isna(orders.loc[1, 'distance_to_destination_mi'])


def test_load_orders_keeps_given_days(tmp_path):
    pd.DataFrame([
        {'order_id': 'A', 'distance_to_destination_mi': 10, 'days_to_deliver': 4},
    ]).to_csv(tmp_path / 'orders.csv', index=False)
    orders = load_orders(tmp_path / 'orders.csv')
    assert orders.loc[0, 'days_to_deliver'] == 4


def test_load_services_derives_total_miles(tmp_path):
    pd.DataFrame([
        {'delivery_service': ' FedEx', 'service_type': 'Ground', 'cost_per_package': 5,
         'days_in_transit': 3, 'miles_covered_per_day': 150},
    ]).to_csv(tmp_path / 'services.csv', index=False)

    services = load_services(tmp_path / 'services.csv')

    assert services.loc[0, 'delivery_service'] == 'fedex'
    assert services.loc[0, 'service_type'] == 'Ground'
    assert services.loc[0, 'total_miles'] == 450


def test_relative_input_resolves_against_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv('SHIPMIX_DATA_DIR', str(tmp_path))
    pd.DataFrame([
        {'order_id': 'A', 'distance_to_destination_mi': 10, 'days_to_deliver': 1},
    ]).to_csv(tmp_path / 'relative_orders.csv', index=False)

    assert resolve_input('relative_orders.csv') == tmp_path / 'relative_orders.csv'
    assert len(load_orders('relative_orders.csv')) == 1


def test_missing_file_raises(tmp_path, monkeypatch):
    monkeypatch.setenv('SHIPMIX_DATA_DIR', str(tmp_path))
    with pytest.raises(FileNotFoundError):
        load_services('nope.csv')


def test_derivations_need_their_columns():
    with pytest.raises(ValueError):
        derive_days_to_deliver(pd.DataFrame({'date_ordered': ['2024-01-01']}))
    with pytest.raises(ValueError):
        derive_total_miles(pd.DataFrame({'days_in_transit': [1]}))
