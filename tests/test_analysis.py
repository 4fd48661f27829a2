"""Tests comparing the relaxation with the exact linear solution."""

import pytest

from cyclic_costs.analysis import closed_form_context, fixed_point_residuals, spectral_radius
from cyclic_costs.scenarios import initial_context
from cyclic_costs.solver import run_simulation


def test_closed_form_matches_hand_solution():
    exact = closed_form_context(initial_context("Base"))
    co2 = 10.8 / 0.95
    eco = (3.5 + 0.05 * co2) / 0.9
    assert exact["co2Cost"] == pytest.approx(co2)
    assert exact["disposalCost"] == pytest.approx(96.0 + co2)
    assert exact["ecoFees"] == pytest.approx(eco)
    assert exact["logisticsCost"] == pytest.approx(35.0 + eco)
    assert max(fixed_point_residuals(exact).values()) < 1e-9


@pytest.mark.parametrize("scenario", ["Base", "HighEnergyPrices"])
def test_relaxation_converges_to_closed_form(scenario):
    ctx = run_simulation(scenario, 200, 1e-10)
    exact = closed_form_context(ctx)
    for name in ("disposalCost", "co2Cost", "logisticsCost", "ecoFees"):
        assert ctx[name] == pytest.approx(exact[name], abs=1e-6)


def test_residuals_of_default_run_stay_below_threshold():
    residuals = fixed_point_residuals(run_simulation("Base"))
    assert max(residuals.values()) < 0.001


def test_model_is_contractive():
    assert spectral_radius(initial_context("Base")) < 1.0
