# MIT License
"""Static catalog of blocks, attributes and formulas.

The :class:`AttributeGraph` is built once and then only read.  It keeps
an explicit, ordered registry of every attribute so that the relaxation
order is reproducible: blocks in the order they were declared, and
attributes inside each block in their declaration order.  The formula
graph contains genuine cycles (CO₂ cost depends on disposal cost and vice
versa), so no topological order exists and none is attempted.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from .errors import ConfigError
from .params import Attribute, Formula


class AttributeGraph:
    """Read-only model of all blocks and their attributes.

    Parameters
    ----------
    blocks:
        Ordered mapping ``block name -> ordered mapping attribute name ->
        Attribute``.  Insertion order fixes the iteration order.

    Raises
    ------
    ConfigError
        If the model is empty, an attribute name is declared twice across
        blocks, an input attribute has no baseline or a calculated
        attribute has no formula.
    """

    def __init__(self, blocks: Mapping[str, Mapping[str, Attribute]]):
        if not blocks:
            raise ConfigError("model must declare at least one block")
        frozen: Dict[str, Mapping[str, Attribute]] = {}
        owner: Dict[str, str] = {}
        for block, attrs in blocks.items():
            for name in attrs:
                if name in owner:
                    raise ConfigError(f"attribute {name!r} declared in both {owner[name]!r} and {block!r}")
                owner[name] = block
            frozen[block] = MappingProxyType(dict(attrs))
        self._blocks: Mapping[str, Mapping[str, Attribute]] = MappingProxyType(frozen)
        self._owner: Mapping[str, str] = MappingProxyType(owner)
        self.validate()

    def __repr__(self) -> str:
        sizes = ", ".join(f"{b}={len(a)}" for b, a in self._blocks.items())
        return f"AttributeGraph({sizes})"

    @property
    def blocks(self) -> List[str]:
        return list(self._blocks)

    def _block(self, block: str) -> Mapping[str, Attribute]:
        try:
            return self._blocks[block]
        except KeyError:
            raise ConfigError(f"unknown block {block!r}") from None

    def attribute(self, block: str, name: str) -> Attribute:
        attrs = self._block(block)
        if name not in attrs:
            raise ConfigError(f"block {block!r} has no attribute {name!r}")
        return attrs[name]

    def attributes_of(self, block: str) -> List[str]:
        """Attribute names of ``block`` in declaration order."""
        return list(self._block(block))

    def input_attributes(self, block: str) -> List[str]:
        return [n for n, a in self._block(block).items() if not a.is_calculated]

    def calculated_attributes(self) -> List[Tuple[str, str]]:
        """``(block, name)`` of every calculated attribute, blocks in order."""
        return [
            (block, name)
            for block, attrs in self._blocks.items()
            for name, attr in attrs.items()
            if attr.is_calculated
        ]

    def all_attributes(self) -> List[str]:
        return [name for attrs in self._blocks.values() for name in attrs]

    def block_of(self, name: str) -> str:
        try:
            return self._owner[name]
        except KeyError:
            raise ConfigError(f"unknown attribute {name!r}") from None

    def formula_of(self, block: str, name: str) -> Formula:
        """Return the formula of a calculated attribute.

        Raises
        ------
        ConfigError
            If the attribute is an input or a calculated attribute was
            declared without a formula.
        """
        attr = self.attribute(block, name)
        if not attr.is_calculated:
            raise ConfigError(f"{block}.{name} is an input attribute and has no formula")
        if attr.formula is None:
            raise ConfigError(f"calculated attribute {block}.{name} has no formula")
        return attr.formula

    def baseline_of(self, block: str, name: str) -> float:
        attr = self.attribute(block, name)
        if attr.is_calculated:
            return 0.0
        return float(attr.baseline_value)

    def validate(self) -> None:
        for block, attrs in self._blocks.items():
            for name, attr in attrs.items():
                if attr.is_calculated:
                    self.formula_of(block, name)
                elif attr.baseline_value is None:
                    raise ConfigError(f"input attribute {block}.{name} has no baseline value")


def _inputs(**values: float) -> Dict[str, Attribute]:
    return {name: Attribute(kind="input", baseline_value=v) for name, v in values.items()}


def _calculated(items: Iterable[Tuple[str, Formula]]) -> Dict[str, Attribute]:
    return {name: Attribute(kind="calculated", formula=fn) for name, fn in items}


def build_default_graph() -> AttributeGraph:
    """Build the Production / Logistics cost model.

    Disposal cost and CO₂ cost feed each other, logistics cost and eco
    fees feed each other, and eco fees also pick up a share of CO₂ cost.
    """
    production = _inputs(materialCost=120.0, energyCost=60.0)
    production.update(_calculated([
        ("disposalCost", lambda ctx: ctx["materialCost"] * 0.8 + ctx["co2Cost"]),
        ("co2Cost", lambda ctx: ctx["energyCost"] * 0.1 + ctx["disposalCost"] * 0.05),
    ]))
    logistics = _inputs(transportCost=35.0)
    logistics.update(_calculated([
        ("logisticsCost", lambda ctx: ctx["transportCost"] + ctx["ecoFees"]),
        ("ecoFees", lambda ctx: ctx["logisticsCost"] * 0.1 + ctx["co2Cost"] * 0.05),
    ]))
    return AttributeGraph({"Production": production, "Logistics": logistics})


DEFAULT_GRAPH = build_default_graph()
