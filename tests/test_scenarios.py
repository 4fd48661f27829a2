"""Tests for scenario resolution.

These tests check the override precedence for every input attribute,
the fallback for unknown scenario names, finiteness validation and
loading a scenario catalog from JSON.
"""

import json
import math
from pathlib import Path

import pydantic
import pytest

from cyclic_costs.errors import ConfigError, ValidationError
from cyclic_costs.graph import DEFAULT_GRAPH
from cyclic_costs.params import ScenarioOverrides
from cyclic_costs.scenarios import (
    DEFAULT_SCENARIOS,
    as_overrides,
    initial_context,
    load_scenario_catalog,
    merge_overrides,
    resolve_scenario,
)
from cyclic_costs.solver import run_simulation

PRESETS = Path(__file__).resolve().parent.parent / "assets" / "presets" / "scenarios.json"

CATALOG = {
    "Base": ScenarioOverrides(Production={"materialCost": 100.0, "energyCost": 50.0}, Logistics={"transportCost": 30.0}),
    "Alt": ScenarioOverrides(Production={"materialCost": 110.0}, Logistics={"transportCost": 31.0}),
}


def test_initial_context_zeroes_calculated_attributes():
    ctx = initial_context("Base")
    assert set(ctx) == set(DEFAULT_GRAPH.all_attributes())
    assert list(ctx) == DEFAULT_GRAPH.all_attributes()
    for name in ("disposalCost", "co2Cost", "logisticsCost", "ecoFees"):
        assert ctx[name] == 0.0
    assert (ctx["materialCost"], ctx["energyCost"], ctx["transportCost"]) == (120.0, 60.0, 35.0)


def test_high_energy_prices_inherits_base_material_cost():
    ctx = initial_context("HighEnergyPrices")
    assert ctx["energyCost"] == 90.0
    assert ctx["transportCost"] == 40.0
    assert ctx["materialCost"] == 120.0


@pytest.mark.parametrize("block,name,declared", [
    ("Production", "materialCost", 120.0),
    ("Production", "energyCost", 60.0),
    ("Logistics", "transportCost", 35.0),
])
def test_override_precedence_per_attribute(block, name, declared):
    empty = ScenarioOverrides()
    base = ScenarioOverrides(**{block: {name: 1.0}})
    scenario = ScenarioOverrides(**{block: {name: 2.0}})
    manual = ScenarioOverrides(**{block: {name: 3.0}})

    assert merge_overrides(DEFAULT_GRAPH, empty, empty, empty)[block][name] == declared
    assert merge_overrides(DEFAULT_GRAPH, base, empty, empty)[block][name] == 1.0
    assert merge_overrides(DEFAULT_GRAPH, base, scenario, empty)[block][name] == 2.0
    assert merge_overrides(DEFAULT_GRAPH, base, scenario, manual)[block][name] == 3.0
    # manual wins even without a scenario value
    assert merge_overrides(DEFAULT_GRAPH, base, empty, manual)[block][name] == 3.0


def test_precedence_through_custom_catalog():
    ctx = initial_context("Alt", overrides={"Logistics": {"transportCost": 99.0}}, catalog=CATALOG)
    assert ctx["materialCost"] == 110.0  # scenario over Base
    assert ctx["energyCost"] == 50.0  # Base over declared baseline
    assert ctx["transportCost"] == 99.0  # manual over scenario


def test_unknown_scenario_falls_back_to_base(caplog):
    with caplog.at_level("WARNING", logger="cyclic_costs"):
        unknown = run_simulation("DoesNotExist")
    assert unknown == run_simulation("Base")
    assert any("DoesNotExist" in r.getMessage() for r in caplog.records)
    assert resolve_scenario("DoesNotExist") == ScenarioOverrides()


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_override_is_rejected(bad):
    with pytest.raises(ValidationError, match="finite"):
        initial_context("Base", overrides={"Production": {"energyCost": bad}})


def test_non_finite_catalog_value_is_rejected():
    catalog = dict(CATALOG, Broken=ScenarioOverrides(Logistics={"transportCost": float("inf")}))
    with pytest.raises(ValidationError):
        run_simulation("Broken", catalog=catalog)


def test_override_of_calculated_or_unknown_attribute_is_rejected():
    with pytest.raises(ValidationError, match="not an input attribute"):
        initial_context("Base", overrides={"Production": {"co2Cost": 1.0}})
    with pytest.raises(ValidationError, match="not an input attribute"):
        initial_context("Base", overrides={"Logistics": {"materialCost": 1.0}})


def test_unknown_block_is_rejected():
    with pytest.raises(ValidationError):
        as_overrides({"Finance": {"interest": 1.0}})


def test_negative_inputs_are_accepted():
    ctx = run_simulation("Base", overrides={"Production": {"materialCost": -10.0}})
    assert math.isclose(ctx["disposalCost"], -8.0 + ctx["co2Cost"], abs_tol=1e-3)


def test_load_preset_catalog():
    catalog = load_scenario_catalog(PRESETS)
    assert list(catalog) == ["Base", "HighEnergyPrices", "CheapTransport"]
    ctx = initial_context("CheapTransport", catalog=catalog)
    assert ctx["transportCost"] == 20.0
    assert ctx["energyCost"] == 60.0


def test_catalog_without_base_is_config_error(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"Alt": {"Production": {"energyCost": 1.0}}}))
    with pytest.raises(ConfigError):
        load_scenario_catalog(path)


def test_default_catalog_is_read_only():
    resolved = resolve_scenario("Base")
    resolved.Production["materialCost"] = 1.0
    assert initial_context("Base")["materialCost"] == 120.0
    with pytest.raises(pydantic.ValidationError):
        DEFAULT_SCENARIOS["Base"].Production = {}
    with pytest.raises(TypeError):
        DEFAULT_SCENARIOS["Extra"] = ScenarioOverrides()
