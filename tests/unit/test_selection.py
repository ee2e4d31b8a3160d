import pandas as pd
import pytest

from shipmix.exceptions import UnknownCarrierPriority
from shipmix.models import FINAL_COLUMNS
from shipmix.selection import check_carrier_ranks, select_best_services

RANKS = {'fedex': 1, 'usps': 2, 'ups': 3}


def _candidates(rows):
    return pd.DataFrame(rows, columns=['order_id', 'delivery_service', 'service_type', 'cost'])


def test_equal_cost_lower_rank_wins():
    final = select_best_services(_candidates([
        ('O1', 'usps', 'priority', 10),
        ('O1', 'fedex', 'ground', 10),
    ]), RANKS)
    assert final.to_dict(orient='records') == [
        {'order_id': 'O1', 'delivery_service': 'fedex', 'service_type': 'ground', 'shipping_cost': 10}
    ]


def test_lower_cost_beats_rank():
    final = select_best_services(_candidates([
        ('O1', 'fedex', 'air', 20),
        ('O1', 'usps', 'priority', 15),
        ('O1', 'ups', 'ground', 15),
    ]), RANKS)
    assert final.iloc[0]['delivery_service'] == 'usps'
    assert final.iloc[0]['shipping_cost'] == 15


def test_one_final_per_order_sorted_by_order_id():
    final = select_best_services(_candidates([
        ('O2', 'ups', 'ground', 9),
        ('O1', 'usps', 'priority', 12),
        ('O2', 'fedex', 'ground', 11),
        ('O3', 'ups', 'air', 40),
    ]), RANKS)
    assert list(final.columns) == FINAL_COLUMNS
    assert list(final['order_id']) == ['O1', 'O2', 'O3']
    assert list(final['delivery_service']) == ['usps', 'ups', 'ups']


def test_candidate_row_order_does_not_matter():
    rows = [
        ('O1', 'usps', 'priority', 10),
        ('O1', 'fedex', 'ground', 10),
        ('O2', 'ups', 'ground', 7),
        ('O2', 'usps', 'priority', 7),
    ]
    forward = select_best_services(_candidates(rows), RANKS)
    backward = select_best_services(_candidates(rows[::-1]), RANKS)
    pd.testing.assert_frame_equal(forward, backward)


def test_no_candidates_no_final():
    final = select_best_services(_candidates([]), RANKS)
    assert final.empty
    assert list(final.columns) == FINAL_COLUMNS


def test_unranked_carrier_raises():
    with pytest.raises(UnknownCarrierPriority) as excinfo:
        select_best_services(_candidates([
            ('O1', 'dhl', 'express', 10),
            ('O1', 'fedex', 'ground', 10),
        ]), RANKS)
    assert excinfo.value.carriers == ['dhl']
    assert 'dhl' in str(excinfo.value)


def test_duplicate_candidate_per_carrier_rejected():
    with pytest.raises(ValueError):
        select_best_services(_candidates([
            ('O1', 'fedex', 'ground', 10),
            ('O1', 'fedex', 'air', 12),
        ]), RANKS)


def test_check_carrier_ranks_lists_all_unknown():
    with pytest.raises(UnknownCarrierPriority) as excinfo:
        check_carrier_ranks(['fedex', 'ontrac', 'dhl'], RANKS)
    assert excinfo.value.carriers == ['dhl', 'ontrac']
    check_carrier_ranks(['fedex', 'ups'], RANKS)
