# MIT License
"""Flatten a converged context into labeled rows for display.

The presentation order is fixed and spans both blocks.  Projection never
mutates the context it is given.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Tuple

import pandas as pd

from .params import DisplayRow

DISPLAY_ORDER: Tuple[Tuple[str, str], ...] = (
    ("Material Cost", "materialCost"),
    ("Energy Cost", "energyCost"),
    ("Disposal Cost", "disposalCost"),
    ("CO2 Cost", "co2Cost"),
    ("Transport Cost", "transportCost"),
    ("Logistics Cost", "logisticsCost"),
    ("Eco Fees", "ecoFees"),
)


def project_display_rows(context: Mapping[str, float]) -> List[DisplayRow]:
    """Return one :class:`DisplayRow` per attribute in presentation order.

    Parameters
    ----------
    context:
        A simulation context holding every attribute in
        :data:`DISPLAY_ORDER`.

    Returns
    -------
    list of DisplayRow
        Seven rows: material, energy, disposal, CO₂, transport,
        logistics and eco fees.
    """
    return [DisplayRow(label=label, value=context[name]) for label, name in DISPLAY_ORDER]


def rows_to_frame(rows: Iterable[DisplayRow]) -> pd.DataFrame:
    """Tabulate display rows as a dataframe with ``label`` and ``value`` columns."""
    return pd.DataFrame([row.model_dump() for row in rows], columns=["label", "value"])
