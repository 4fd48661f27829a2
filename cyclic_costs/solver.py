# MIT License
"""Fixed-point relaxation of the cyclic cost model.

The calculated attributes form a graph with real cycles, so they cannot
be evaluated in a single topological pass.  :class:`ConvergenceSolver`
instead sweeps over every calculated attribute in declaration order,
writing each new value straight back into the context so that later
formulas in the same pass read it (Gauss-Seidel rather than Jacobi).
After every pass the largest absolute change against the snapshot taken
at the start of the pass is compared to the threshold.

Running out of passes is not an error: the last context is returned and
the result is marked as exhausted.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .errors import ConfigError
from .graph import DEFAULT_GRAPH, AttributeGraph
from .params import ScenarioOverrides, SimulationContext, SolverResult, SolverSettings
from .scenarios import BASE_SCENARIO, OverridesLike, initial_context

logger = logging.getLogger(__name__)


class ConvergenceSolver:
    """Gauss-Seidel relaxation over the calculated attributes of a graph.

    The graph is meant to be passed in by the caller; :data:`DEFAULT_GRAPH`
    is only a convenience default for the built-in cost model.
    """

    def __init__(self, graph: AttributeGraph = DEFAULT_GRAPH, settings: Optional[SolverSettings] = None):
        self.graph = graph
        self.settings = settings or SolverSettings()
        # (name, formula) pairs in the fixed sweep order
        self._sweep = [
            (name, graph.formula_of(block, name))
            for block, name in graph.calculated_attributes()
        ]

    def sweep(self, context: SimulationContext) -> float:
        """Run one relaxation pass in place and return the largest change."""
        snapshot = dict(context)
        for name, formula in self._sweep:
            context[name] = formula(context)
        return max((abs(context[name] - snapshot[name]) for name, _ in self._sweep), default=0.0)

    def solve(self, context: SimulationContext) -> SolverResult:
        """Iterate ``context`` in place until it stabilises or the budget runs out.

        Parameters
        ----------
        context:
            Starting values for every attribute of the graph, usually from
            :func:`~cyclic_costs.scenarios.initial_context`.

        Returns
        -------
        SolverResult
            The final context plus pass count, per-pass deltas and
            whether the threshold was reached.
        """
        missing = [name for name in self.graph.all_attributes() if name not in context]
        if missing:
            raise ConfigError(f"context is missing attributes: {', '.join(missing)}")

        max_iterations = self.settings.max_iterations
        threshold = self.settings.threshold
        deltas = []
        converged = False
        for i in range(max_iterations):
            delta = self.sweep(context)
            deltas.append(delta)
            if self.settings.debug:
                values = ", ".join(f"{name}={context[name]:.6f}" for name, _ in self._sweep)
                logger.debug("Iteration %d: max delta %.6g; %s", i + 1, delta, values)
            if delta < threshold:
                converged = True
                break

        if converged:
            logger.info("Converged after %d iterations (max delta %.3g)", len(deltas), deltas[-1])
        else:
            logger.warning(
                "No convergence within %d iterations (threshold %g); returning last context",
                max_iterations, threshold,
            )
        return SolverResult(context=context, iterations=len(deltas), converged=converged, deltas=deltas)


def solve_scenario(
    scenario_id: str = BASE_SCENARIO,
    max_iterations: int = 100,
    threshold: float = 0.001,
    overrides: OverridesLike = None,
    graph: AttributeGraph = DEFAULT_GRAPH,
    catalog: Optional[Mapping[str, ScenarioOverrides]] = None,
    debug: bool = False,
) -> SolverResult:
    """Resolve a scenario and relax it, keeping the convergence details.

    ``graph`` and ``catalog`` should be passed explicitly by callers that
    own a model; the defaults are the built-in cost model and scenarios.
    """
    settings = SolverSettings(max_iterations=max_iterations, threshold=threshold, debug=debug)
    context = initial_context(scenario_id, graph, overrides, catalog)
    logger.info("Running scenario %r (max_iterations=%d, threshold=%g)", scenario_id, max_iterations, threshold)
    return ConvergenceSolver(graph, settings).solve(context)


def run_simulation(
    scenario_id: str = BASE_SCENARIO,
    max_iterations: int = 100,
    threshold: float = 0.001,
    overrides: OverridesLike = None,
    graph: AttributeGraph = DEFAULT_GRAPH,
    catalog: Optional[Mapping[str, ScenarioOverrides]] = None,
    debug: bool = False,
) -> SimulationContext:
    """Run one scenario and return its final context.

    The context is returned whether or not the threshold was reached;
    use :func:`solve_scenario` to find out which.
    """
    return solve_scenario(scenario_id, max_iterations, threshold, overrides, graph, catalog, debug).context
