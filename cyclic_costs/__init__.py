"""Core package for the cyclic Production/Logistics cost model.

The calculated costs depend on each other in cycles (CO₂ cost feeds
disposal cost, which feeds CO₂ cost again), so a run resolves the
starting values of a scenario and then relaxes the calculated attributes
until they stop changing.

The high-level :func:`run_simulation` helper composes
:func:`~cyclic_costs.scenarios.initial_context` and
:class:`~cyclic_costs.solver.ConvergenceSolver`;
:func:`project_display_rows` turns the result into labeled rows.

Every operation takes the :class:`AttributeGraph` and the scenario catalog
as arguments.  :data:`DEFAULT_GRAPH` and :data:`DEFAULT_SCENARIOS` are
read-only defaults for the built-in Production/Logistics model.
"""

from .errors import ConfigError, ValidationError
from .params import Attribute, DisplayRow, ScenarioOverrides, SimulationContext, SolverResult, SolverSettings
from .graph import AttributeGraph, build_default_graph, DEFAULT_GRAPH
from .scenarios import DEFAULT_SCENARIOS, initial_context, load_scenario_catalog, merge_overrides, resolve_scenario
from .solver import ConvergenceSolver, run_simulation, solve_scenario
from .projection import DISPLAY_ORDER, project_display_rows, rows_to_frame
from .aggregate import compare_scenarios

__all__ = [
    "ConfigError",
    "ValidationError",
    "Attribute",
    "DisplayRow",
    "ScenarioOverrides",
    "SimulationContext",
    "SolverResult",
    "SolverSettings",
    "AttributeGraph",
    "build_default_graph",
    "DEFAULT_GRAPH",
    "DEFAULT_SCENARIOS",
    "initial_context",
    "load_scenario_catalog",
    "merge_overrides",
    "resolve_scenario",
    "ConvergenceSolver",
    "run_simulation",
    "solve_scenario",
    "DISPLAY_ORDER",
    "project_display_rows",
    "rows_to_frame",
    "compare_scenarios",
]

__version__ = "0.1.0"
