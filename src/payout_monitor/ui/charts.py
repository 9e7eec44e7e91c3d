"""
Payout Monitor - Charts
=======================

Plotly figures for the account cards.
"""

import plotly.graph_objects as go

from payout_monitor.core.models import Account, GlobalConfig
from payout_monitor.ledger.portfolio_summary import profit_history_frame

QUALIFIED_COLOR = "#10B981"
UNQUALIFIED_COLOR = "#94A3B8"
LOSS_COLOR = "#EF4444"
TARGET_LINE_COLOR = "#6366F1"


def build_profit_chart_figure(account: Account, config: GlobalConfig, height: int = 220) -> go.Figure:
    """
    Bar chart of daily entries, colored by qualification, with the daily
    target drawn as a dashed line.
    """
    df = profit_history_frame(account, config)

    colors = [
        QUALIFIED_COLOR if qualified else (LOSS_COLOR if profit < 0 else UNQUALIFIED_COLOR)
        for profit, qualified in zip(df["profit"], df["qualified"])
    ]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["day"],
            y=df["profit"],
            marker_color=colors,
            name="Daily P/L",
            hovertemplate="Day %{x}<br>P/L: $%{y:,.2f}<extra></extra>",
        )
    )
    fig.add_hline(
        y=config.target_profit_threshold,
        line_dash="dash",
        line_color=TARGET_LINE_COLOR,
        annotation_text=f"Target ${config.target_profit_threshold:,.0f}",
        annotation_position="top left",
    )
    fig.update_layout(
        height=height,
        margin=dict(l=10, r=10, t=20, b=10),
        showlegend=False,
        xaxis_title="Day",
        yaxis_title="P/L ($)",
        template="plotly_white",
    )
    return fig
