# MIT License
"""Data models for the cyclic cost model.

All data models are defined using [`pydantic.BaseModel`](https://docs.pydantic.dev/)
to provide type checking, validation and JSON serialisation.  The
attribute catalog itself lives in :mod:`cyclic_costs.graph`; this module
only holds the value objects that flow between the resolver, the solver
and the projector.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

#: Flat mapping from every attribute name (across all blocks) to its value.
SimulationContext = Dict[str, float]

#: A pure function of the current context.
Formula = Callable[[Dict[str, float]], float]

AttributeKind = Literal["input", "calculated"]


class Attribute(BaseModel):
    """A single named numeric quantity inside a block.

    Attributes
    ----------
    kind:
        ``"input"`` for user supplied values, ``"calculated"`` for values
        derived from other attributes.
    baseline_value:
        Declared default for input attributes.  Unused for calculated
        attributes.
    formula:
        Function of the simulation context returning the new value of a
        calculated attribute.  It may read any attribute by name,
        including ones that in turn depend on this attribute.
    """

    model_config = ConfigDict(frozen=True)

    kind: AttributeKind
    baseline_value: Optional[float] = Field(None, description="Declared default of an input attribute")
    formula: Optional[Formula] = Field(None, description="Formula of a calculated attribute")

    @property
    def is_calculated(self) -> bool:
        return self.kind == "calculated"


class ScenarioOverrides(BaseModel):
    """Partial override of input values, scoped per block.

    Used both for catalog entries (named what-if cases) and for the manual
    overrides a caller passes into a run.  Finiteness is checked when the
    overrides are merged, so that catalog values and manual values go
    through the same gate.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    Production: Dict[str, float] = Field(default_factory=dict, description="Overrides for Production inputs")
    Logistics: Dict[str, float] = Field(default_factory=dict, description="Overrides for Logistics inputs")

    def for_block(self, block: str) -> Dict[str, float]:
        """Return a copy of the overrides for ``block`` (empty if none)."""
        return dict(getattr(self, block, None) or {})


class SolverSettings(BaseModel):
    """Bounds for a single relaxation run.

    Out-of-range values are not rejected: a negative pass budget runs no
    passes, and a threshold that no delta can go below (zero, negative or
    NaN) runs the whole budget and ends exhausted.
    """

    max_iterations: int = Field(100, description="Maximum number of relaxation passes")
    threshold: float = Field(0.001, description="Largest per-attribute change accepted as converged")
    debug: bool = Field(False, description="Log calculated values after every pass")


class SolverResult(BaseModel):
    """Outcome of a relaxation run.

    ``converged`` is False when the iteration budget ran out first; the
    context is returned either way.
    """

    context: Dict[str, float]
    iterations: int = Field(0, ge=0)
    converged: bool = False
    deltas: List[float] = Field(default_factory=list, description="Maximum absolute change per pass")

    @property
    def status(self) -> str:
        return "converged" if self.converged else "exhausted"


class DisplayRow(BaseModel):
    """One labeled value of the presentation table."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: float
