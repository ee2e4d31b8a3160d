import pulp
import pytest

from shipmix.utils.solver import pick_solver


def test_cbc_choice(monkeypatch):
    monkeypatch.setenv('SHIPMIX_SOLVER', 'cbc')
    assert isinstance(pick_solver(), pulp.PULP_CBC_CMD)


def test_gurobi_choice(monkeypatch):
    monkeypatch.setenv('SHIPMIX_SOLVER', 'Gurobi')
    assert isinstance(pick_solver(), pulp.GUROBI_CMD)


def test_auto_falls_back_to_cbc(monkeypatch):
    monkeypatch.setenv('SHIPMIX_SOLVER', 'auto')
    monkeypatch.setattr(pulp.GUROBI_CMD, 'available', lambda self: False)
    assert isinstance(pick_solver(), pulp.PULP_CBC_CMD)


def test_unknown_choice_raises(monkeypatch):
    monkeypatch.setenv('SHIPMIX_SOLVER', 'cplex')
    with pytest.raises(ValueError):
        pick_solver()
