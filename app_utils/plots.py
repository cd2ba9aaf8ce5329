import pandas as pd
import plotly.graph_objects as go

from app_utils.progress import week_band

WEEK_COLORS = ["#e8f5e9", "#e3f2fd", "#fff3e0", "#f3e5f5", "#fbe9e7"]
DONE_ALPHA = 0.45


def hex_with_alpha(hex_color: str, alpha: float) -> str:
    c = hex_color.lstrip("#")
    r, g, b = int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


def week_color(year: int, month: int, day: int) -> str:
    return WEEK_COLORS[week_band(year, month, day) % len(WEEK_COLORS)]


def grid_css(grid: pd.DataFrame, colors: dict, year: int, month: int) -> pd.DataFrame:
    """CSS per grid cell: week band for open days, habit colour for done ones."""
    css = pd.DataFrame("", index=grid.index, columns=grid.columns)
    for col in grid.columns:
        if not col.isdigit():
            continue
        band = f"background-color: {week_color(year, month, int(col))}"
        for habit_id, done in grid[col].items():
            if done:
                css.at[habit_id, col] = f"background-color: {hex_with_alpha(colors[habit_id], DONE_ALPHA)}"
            else:
                css.at[habit_id, col] = band
    return css


def daily_completion_chart(df: pd.DataFrame, title="Month Chart"):
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["day"], y=df["percent"], mode="lines+markers",
        name="Daily completion % (all habits)",
        line=dict(width=2, shape="spline", smoothing=0.3),
    ))
    fig.update_layout(
        template="plotly_dark",
        height=360,
        margin=dict(l=16, r=16, t=52, b=16),
        title=dict(text=title, x=0.02),
        font=dict(size=13),
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    fig.update_xaxes(title="Day", dtick=1, showgrid=True, gridcolor="rgba(255,255,255,0.08)")
    fig.update_yaxes(title="% done", range=[0, 100], showgrid=True, gridcolor="rgba(255,255,255,0.08)")
    return fig
