# MIT License
"""Scenario catalog and initial-state resolution.

A run starts from a flat :data:`~cyclic_costs.params.SimulationContext`.
Input attributes take their value from, in order of precedence:

1. manual overrides supplied by the caller,
2. the named scenario,
3. the ``Base`` scenario,
4. the baseline declared in the attribute graph.

Calculated attributes always start at zero.  An unknown scenario name is
not an error; it resolves to an empty override set so the run behaves
exactly like ``Base``.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

import pydantic

from .errors import ConfigError, ValidationError
from .graph import DEFAULT_GRAPH, AttributeGraph
from .params import ScenarioOverrides, SimulationContext

logger = logging.getLogger(__name__)

BASE_SCENARIO = "Base"

OverridesLike = Union[ScenarioOverrides, Mapping[str, Mapping[str, float]], None]

DEFAULT_SCENARIOS: Mapping[str, ScenarioOverrides] = MappingProxyType({
    "Base": ScenarioOverrides(
        Production={"materialCost": 120.0, "energyCost": 60.0},
        Logistics={"transportCost": 35.0},
    ),
    "HighEnergyPrices": ScenarioOverrides(
        Production={"energyCost": 90.0},
        Logistics={"transportCost": 40.0},
    ),
})


def as_overrides(value: OverridesLike) -> ScenarioOverrides:
    """Coerce ``None``, a plain nested dict or a model into :class:`ScenarioOverrides`.

    Raises
    ------
    ValidationError
        If the mapping names an unknown block or holds non-numeric values.
    """
    if value is None:
        return ScenarioOverrides()
    if isinstance(value, ScenarioOverrides):
        return value
    try:
        return ScenarioOverrides.model_validate(dict(value))
    except pydantic.ValidationError as exc:
        raise ValidationError(f"invalid overrides: {exc}") from exc


def resolve_scenario(
    scenario_id: str,
    catalog: Optional[Mapping[str, ScenarioOverrides]] = None,
) -> ScenarioOverrides:
    """Return a copy of the overrides of ``scenario_id``, or an empty set if it is unknown.

    The copy keeps the catalog read-only: callers may edit what they get
    back without affecting later runs.
    """
    catalog = DEFAULT_SCENARIOS if catalog is None else catalog
    scenario = catalog.get(scenario_id)
    if scenario is None:
        logger.warning("Unknown scenario %r, falling back to %s values", scenario_id, BASE_SCENARIO)
        return ScenarioOverrides()
    return scenario.model_copy(deep=True)


def _checked(block: str, name: str, value: float, source: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{source} value for {block}.{name} is not a number: {value!r}") from None
    if not math.isfinite(value):
        raise ValidationError(f"{source} value for {block}.{name} must be finite, got {value}")
    return value


def merge_overrides(
    graph: AttributeGraph,
    base: ScenarioOverrides,
    scenario: ScenarioOverrides,
    manual: ScenarioOverrides,
) -> Dict[str, Dict[str, float]]:
    """Merge override layers into resolved input values per block.

    Every layer is validated before it is applied: each name must be an
    input attribute of its block and each value must be finite.

    Returns
    -------
    dict
        ``block -> {input name -> value}`` covering every input attribute
        of the graph.
    """
    layers = (("Base", base), ("scenario", scenario), ("manual", manual))
    resolved: Dict[str, Dict[str, float]] = {}
    for block in graph.blocks:
        inputs = graph.input_attributes(block)
        values = {name: graph.baseline_of(block, name) for name in inputs}
        for source, layer in layers:
            for name, value in layer.for_block(block).items():
                if name not in values:
                    raise ValidationError(f"{source} override names {block}.{name}, which is not an input attribute")
                values[name] = _checked(block, name, value, source)
        resolved[block] = values
    return resolved


def initial_context(
    scenario_id: str,
    graph: AttributeGraph = DEFAULT_GRAPH,
    overrides: OverridesLike = None,
    catalog: Optional[Mapping[str, ScenarioOverrides]] = None,
) -> SimulationContext:
    """Build the starting context of a run.

    Parameters
    ----------
    scenario_id:
        Name of a catalog entry.  Unknown names behave like ``Base``.
    graph:
        The attribute model.  Pass it explicitly; :data:`DEFAULT_GRAPH`
        is only a convenience default.
    overrides:
        Manual overrides per block, applied last.
    catalog:
        Scenario catalog; defaults to :data:`DEFAULT_SCENARIOS`.

    Returns
    -------
    dict
        One entry per declared attribute, calculated attributes at 0.
    """
    catalog = DEFAULT_SCENARIOS if catalog is None else catalog
    base = catalog.get(BASE_SCENARIO, ScenarioOverrides())
    scenario = resolve_scenario(scenario_id, catalog)
    resolved = merge_overrides(graph, base, scenario, as_overrides(overrides))
    context: SimulationContext = {}
    for block in graph.blocks:
        for name in graph.attributes_of(block):
            context[name] = resolved[block].get(name, 0.0)
    return context


def load_scenario_catalog(path: Union[str, Path]) -> Dict[str, ScenarioOverrides]:
    """Load a scenario catalog from a JSON file.

    The file maps scenario names to ``{"Production": {...}, "Logistics": {...}}``.

    Raises
    ------
    ConfigError
        If the catalog has no ``Base`` entry.
    ValidationError
        If an entry is malformed.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    catalog = {name: as_overrides(entry) for name, entry in data.items()}
    if BASE_SCENARIO not in catalog:
        raise ConfigError(f"scenario catalog {path} has no {BASE_SCENARIO!r} entry")
    return catalog
