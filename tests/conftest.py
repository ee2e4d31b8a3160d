import pytest
import pandas as pd

from shipmix.config.parameters import Parameters

@pytest.fixture(autouse=True)
def tmp_results_dir(tmp_path, monkeypatch):
    """Redirect results into a temp folder and pin the MILP solver to CBC"""
    fake_results = tmp_path / "results"
    fake_results.mkdir()
    monkeypatch.setenv("SHIPMIX_RESULTS_DIR", str(fake_results))
    monkeypatch.setenv("SHIPMIX_SOLVER", "cbc")
    return fake_results

@pytest.fixture
def params():
    return Parameters.from_yaml()

@pytest.fixture
def e2e_orders():
    """Single order O1: 2 days to deliver, 300 miles away."""
    return pd.DataFrame([{
        'order_id': 'O1',
        'date_ordered': pd.Timestamp('2024-03-01'),
        'promised_delivery_date': pd.Timestamp('2024-03-03'),
        'days_to_deliver': 2,
        'distance_to_destination_mi': 300.0,
        'package_cnt': 1,
    }])

@pytest.fixture
def e2e_services():
    """fedex Ground is too slow, fedex Air and usps Priority are feasible."""
    return pd.DataFrame([
        {'delivery_service': 'fedex', 'service_type': 'Ground', 'cost_per_package': 5,
         'days_in_transit': 3, 'miles_covered_per_day': 400 / 3, 'total_miles': 400},
        {'delivery_service': 'fedex', 'service_type': 'Air', 'cost_per_package': 20,
         'days_in_transit': 1, 'miles_covered_per_day': 500, 'total_miles': 500},
        {'delivery_service': 'usps', 'service_type': 'Priority', 'cost_per_package': 15,
         'days_in_transit': 2, 'miles_covered_per_day': 175, 'total_miles': 350},
    ])

@pytest.fixture
def toy_orders():
    """Three orders: an easy one, a tight one and one nobody can serve."""
    return pd.DataFrame([
        {'order_id': 'A', 'days_to_deliver': 5, 'distance_to_destination_mi': 200.0},
        {'order_id': 'B', 'days_to_deliver': 1, 'distance_to_destination_mi': 450.0},
        {'order_id': 'C', 'days_to_deliver': 0, 'distance_to_destination_mi': 5000.0},
    ])

@pytest.fixture
def toy_services():
    return pd.DataFrame([
        {'delivery_service': 'fedex', 'service_type': 'ground', 'cost_per_package': 8,
         'days_in_transit': 4, 'total_miles': 1200},
        {'delivery_service': 'fedex', 'service_type': 'express', 'cost_per_package': 30,
         'days_in_transit': 1, 'total_miles': 600},
        {'delivery_service': 'usps', 'service_type': 'priority', 'cost_per_package': 8,
         'days_in_transit': 3, 'total_miles': 900},
        {'delivery_service': 'usps', 'service_type': 'express', 'cost_per_package': 25,
         'days_in_transit': 1, 'total_miles': 400},
        {'delivery_service': 'ups', 'service_type': 'ground', 'cost_per_package': 9,
         'days_in_transit': 5, 'total_miles': 1500},
        {'delivery_service': 'ups', 'service_type': 'next_day', 'cost_per_package': 28,
         'days_in_transit': 1, 'total_miles': 700},
    ])
