# MIT License
"""Plotly figure builders for scenario comparisons.

Figures are returned, never shown, so that a front end can decide how to
render them.
"""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

COLORS = ["#82ca9d", "#8884d8", "#ffc658", "#ff8042", "#0088FE", "#00C49F"]


def fig_scenario_comparison(df: pd.DataFrame) -> go.Figure:
    """Create a grouped bar chart of a scenario comparison table.

    Parameters
    ----------
    df:
        Output of :func:`~cyclic_costs.aggregate.compare_scenarios`:
        indexed by label, one column per scenario.

    Returns
    -------
    plotly.graph_objects.Figure
        One bar trace per scenario, labels on the x axis.
    """
    fig = go.Figure()
    for i, scenario in enumerate(df.columns):
        fig.add_bar(x=list(df.index), y=df[scenario].tolist(), name=str(scenario), marker_color=COLORS[i % len(COLORS)])
    fig.update_layout(
        title="Scenario Comparison",
        xaxis_title="Attribute",
        yaxis_title="Cost (EUR)",
        barmode="group",
        template="plotly_white",
    )
    return fig
