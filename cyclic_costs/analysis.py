# MIT License
"""Reference solutions and consistency checks for the relaxation.

The cost formulas are affine in the calculated attributes once the inputs
are fixed, so the exact fixed point can be obtained with one linear
solve.  The coefficients are recovered by evaluating each formula with
unit perturbations of the calculated attributes, which keeps this module
independent of how the formulas are written.
"""

from __future__ import annotations

from typing import Dict, Mapping

import numpy as np

from .graph import DEFAULT_GRAPH, AttributeGraph


def _linearise(context: Mapping[str, float], graph: AttributeGraph):
    names = [name for _, name in graph.calculated_attributes()]
    formulas = [graph.formula_of(block, name) for block, name in graph.calculated_attributes()]
    origin = dict(context)
    for name in names:
        origin[name] = 0.0
    offset = np.array([f(origin) for f in formulas], dtype=float)
    coeffs = np.zeros((len(names), len(names)))
    for j, name in enumerate(names):
        unit_ctx = dict(origin)
        unit_ctx[name] = 1.0
        coeffs[:, j] = [f(unit_ctx) for f in formulas]
        coeffs[:, j] -= offset
    return names, coeffs, offset


def closed_form_context(context: Mapping[str, float], graph: AttributeGraph = DEFAULT_GRAPH) -> Dict[str, float]:
    """Solve the calculated attributes exactly for the inputs in ``context``.

    Parameters
    ----------
    context:
        Any context carrying the input values; calculated values are
        ignored.
    graph:
        Model whose formulas are affine in the calculated attributes.

    Returns
    -------
    dict
        A copy of ``context`` with every calculated attribute replaced by
        its exact fixed-point value.

    Raises
    ------
    numpy.linalg.LinAlgError
        If the system has no unique fixed point.
    """
    names, coeffs, offset = _linearise(context, graph)
    solution = np.linalg.solve(np.eye(len(names)) - coeffs, offset)
    exact = dict(context)
    exact.update({name: float(v) for name, v in zip(names, solution)})
    return exact


def fixed_point_residuals(context: Mapping[str, float], graph: AttributeGraph = DEFAULT_GRAPH) -> Dict[str, float]:
    """Absolute gap between each calculated attribute and its formula."""
    ctx = dict(context)
    return {
        name: abs(graph.formula_of(block, name)(ctx) - ctx[name])
        for block, name in graph.calculated_attributes()
    }


def spectral_radius(context: Mapping[str, float], graph: AttributeGraph = DEFAULT_GRAPH) -> float:
    """Largest absolute eigenvalue of the dependency matrix.

    Below one means plain fixed-point iteration contracts.
    """
    _, coeffs, _ = _linearise(context, graph)
    return float(np.max(np.abs(np.linalg.eigvals(coeffs))))
