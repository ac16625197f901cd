"""
Plotly charts for the analytics and portfolio reports.

Charts are built from the report models only, never from raw rows, so
what is drawn always matches what the report prints.
"""

import logging
from pathlib import Path
from typing import Dict, Union

import plotly.graph_objects as go

from cellarbook.constants import DisplayConstants
from cellarbook.formatting import format_currency
from cellarbook.schema import DrinkingStats, SpendingStats, TasteProfile, ValueBreakdown

logger = logging.getLogger(__name__)

WINE_RED = 'rgb(139, 0, 0)'
WINE_GOLD = 'rgb(218, 165, 32)'


def _style(fig: go.Figure, title: str, x_title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        title=dict(
            text=f'<b>{title}</b>',
            font=dict(size=16, color='#1A202C'),
            x=0.5,
            xanchor='center'
        ),
        xaxis=dict(title=x_title),
        yaxis=dict(title=y_title, gridcolor='rgba(128, 128, 128, 0.2)'),
        plot_bgcolor='rgba(250, 250, 250, 0.5)',
        paper_bgcolor='white',
        height=400
    )
    return fig


def consumption_chart(stats: DrinkingStats) -> go.Figure:
    """Bottles consumed per month over the trailing year."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[entry.month for entry in stats.by_month],
        y=[entry.count for entry in stats.by_month],
        marker=dict(color=WINE_RED),
        name="Bottles consumed"
    ))
    return _style(fig, "Bottles Consumed", "Month", "Bottles")


def spending_chart(stats: SpendingStats, currency: str = "USD") -> go.Figure:
    """Monthly spend (bars) with bottles bought on a secondary axis."""
    months = [entry.month for entry in stats.by_month]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=months,
        y=[entry.amount / 100 for entry in stats.by_month],
        marker=dict(color=WINE_RED),
        name="Spent",
        text=[format_currency(entry.amount, currency, whole=True) for entry in stats.by_month],
        hovertemplate='<b>%{x}</b><br>Spent: %{text}<extra></extra>'
    ))
    fig.add_trace(go.Scatter(
        x=months,
        y=[entry.bottles for entry in stats.by_month],
        mode='lines+markers',
        line=dict(color=WINE_GOLD, width=2),
        name="Bottles",
        yaxis='y2'
    ))
    _style(fig, "Monthly Spending", "Month", f"Spent ({currency})")
    fig.update_layout(yaxis2=dict(title="Bottles", overlaying='y', side='right'))
    return fig


def rating_distribution_chart(profile: TasteProfile) -> go.Figure:
    """How scores spread across 5-point buckets."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[f"{bucket.score}-{bucket.score + 4}" for bucket in profile.rating_distribution],
        y=[bucket.count for bucket in profile.rating_distribution],
        marker=dict(color=WINE_GOLD),
        name="Ratings"
    ))
    return _style(fig, "Rating Distribution", "Score", "Wines")


def value_by_type_chart(breakdown: Dict[str, ValueBreakdown]) -> go.Figure:
    """Share of current market value per wine type."""
    labels = list(breakdown.keys())
    fig = go.Figure()
    fig.add_trace(go.Pie(
        labels=[label.title() for label in labels],
        values=[entry.market / 100 for entry in breakdown.values()],
        marker=dict(colors=[
            DisplayConstants.WINE_TYPE_COLORS.get(label, DisplayConstants.DEFAULT_COLOR) for label in labels
        ]),
        hole=0.4,
        sort=False
    ))
    fig.update_layout(
        title=dict(text='<b>Value by Type</b>', x=0.5, xanchor='center'),
        height=400,
        paper_bgcolor='white'
    )
    return fig


def save_chart(fig: go.Figure, path: Union[str, Path]) -> Path:
    """Write a chart as a standalone HTML file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(path), include_plotlyjs='cdn')
    logger.info(f"Chart saved to {path}")
    return path
