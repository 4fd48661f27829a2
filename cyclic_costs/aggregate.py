# MIT License
"""Multi-scenario comparison.

Runs several scenarios independently and joins their display rows into
one table with a row per label and a column per scenario.  This is the
data behind the comparison chart and results table of a front end.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional

import pandas as pd

from .graph import DEFAULT_GRAPH, AttributeGraph
from .params import ScenarioOverrides
from .projection import project_display_rows
from .scenarios import BASE_SCENARIO, DEFAULT_SCENARIOS
from .solver import run_simulation

#: Inputs a front end exposes for editing, with the block they belong to.
EDITABLE_INPUTS: Dict[str, str] = {
    "materialCost": "Production",
    "energyCost": "Production",
    "transportCost": "Logistics",
}


def base_input_overrides(
    inputs: Mapping[str, float],
    catalog: Optional[Mapping[str, ScenarioOverrides]] = None,
) -> ScenarioOverrides:
    """Turn edited input values into manual overrides for the Base run.

    Only fields that the ``Base`` entry itself declares are replaced;
    anything else in ``inputs`` is ignored.
    """
    catalog = DEFAULT_SCENARIOS if catalog is None else catalog
    base = catalog.get(BASE_SCENARIO, ScenarioOverrides())
    per_block: Dict[str, Dict[str, float]] = {}
    for name, value in inputs.items():
        block = EDITABLE_INPUTS.get(name)
        if block is not None and name in base.for_block(block):
            per_block.setdefault(block, {})[name] = value
    return ScenarioOverrides(**per_block)


def compare_scenarios(
    scenario_ids: Optional[Iterable[str]] = None,
    inputs: Optional[Mapping[str, float]] = None,
    graph: AttributeGraph = DEFAULT_GRAPH,
    catalog: Optional[Mapping[str, ScenarioOverrides]] = None,
    max_iterations: int = 100,
    threshold: float = 0.001,
    debug: bool = False,
) -> pd.DataFrame:
    """Run each scenario and tabulate the display rows side by side.

    Parameters
    ----------
    scenario_ids:
        Scenarios to run, in column order.  Defaults to the whole catalog.
    inputs:
        Edited values for :data:`EDITABLE_INPUTS`.  They apply to the
        ``Base`` run only.
    graph, catalog:
        Model and scenario catalog shared by all runs.  Pass them
        explicitly; the defaults are the built-in cost model and scenarios.
    max_iterations, threshold, debug:
        Solver settings for every run.

    Returns
    -------
    pandas.DataFrame
        Indexed by display label (presentation order), one float column
        per scenario.
    """
    catalog = DEFAULT_SCENARIOS if catalog is None else catalog
    scenario_ids = list(catalog) if scenario_ids is None else list(scenario_ids)
    columns = {}
    for scenario_id in scenario_ids:
        overrides = None
        if scenario_id == BASE_SCENARIO and inputs:
            overrides = base_input_overrides(inputs, catalog)
        context = run_simulation(scenario_id, max_iterations, threshold, overrides, graph, catalog, debug)
        rows = project_display_rows(context)
        columns[scenario_id] = pd.Series([r.value for r in rows], index=[r.label for r in rows], dtype=float)
    df = pd.DataFrame(columns)
    df.index.name = "label"
    return df
