"""Renderer adapter: interactive strategic diagram with Plotly.

Points sit at (rank-centrality, rank-density), sized by log(frequency)
and coloured by cluster; dashed lines mark the mean-rank crosshair.
"""

from __future__ import annotations

import logging
from pathlib import Path

import plotly.graph_objects as go

from thematicmap.domain.models import QuadrantMap
from thematicmap.ports.renderer import RendererPort
from thematicmap.services.quadrants import BASIC, EMERGING, MOTOR, NICHE, QUADRANT_TITLES

log = logging.getLogger(__name__)


def _hex_to_rgba(colour: str, alpha: float) -> str:
    c = colour.lstrip("#")
    if len(c) != 6:
        return colour
    r, g, b = (int(c[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def marker_sizes(values: list[float], size: float) -> list[float]:
    """Map log-frequencies linearly onto the radius range [15, 100] * size."""
    lo, hi = 15 * size, 100 * size
    if not values:
        return []
    vmin, vmax = min(values), max(values)
    if vmax == vmin:
        return [(lo + hi) / 2] * len(values)
    return [lo + (v - vmin) / (vmax - vmin) * (hi - lo) for v in values]


def _padded(limits: tuple[float, float]) -> list[float]:
    lo, hi = limits
    pad = max((hi - lo) * 0.1, 0.5)
    return [lo - pad, hi + pad]


class PlotlyQuadrantRenderer(RendererPort):
    """Render a :class:`QuadrantMap` as a Plotly figure."""

    def __init__(self, *, width: int = 900, height: int = 800, show_quadrant_titles: bool = True):
        self._width = width
        self._height = height
        self._titles = show_quadrant_titles

    def render(self, quadrant_map: QuadrantMap, *, title: str = "") -> go.Figure:
        pts = quadrant_map.points
        sizes = marker_sizes([p.size_value for p in pts], quadrant_map.size)
        label_px = 12 * (1 + quadrant_map.size)

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=[p.x for p in pts],
                y=[p.y for p in pts],
                mode="markers" if quadrant_map.repel else "markers+text",
                text=[p.label for p in pts],
                textposition="middle center",
                textfont=dict(size=label_px),
                hovertext=[p.hover.replace("\n", "<br>") or p.label for p in pts],
                hoverinfo="text",
                marker=dict(
                    size=sizes,
                    color=[_hex_to_rgba(p.color, 0.5) for p in pts],
                    line=dict(width=0),
                ),
                showlegend=False,
            )
        )

        if quadrant_map.repel:
            for p in pts:
                if not p.label:
                    continue
                fig.add_annotation(
                    x=p.x,
                    y=p.y,
                    text=p.label,
                    showarrow=True,
                    arrowhead=0,
                    ax=0,
                    ay=-30,
                    bgcolor="white",
                    bordercolor=p.color,
                    borderpad=3,
                    font=dict(size=label_px),
                )

        xr = _padded(quadrant_map.xlim)
        yr = _padded(quadrant_map.ylim)
        dash = dict(color="rgba(0,0,0,0.7)", dash="dash", width=1)
        fig.add_hline(y=quadrant_map.mean_density, line=dash)
        fig.add_vline(x=quadrant_map.mean_centrality, line=dash)

        if self._titles:
            corners = {
                MOTOR: (xr[1], yr[1], "right", "top"),
                NICHE: (xr[0], yr[1], "left", "top"),
                EMERGING: (xr[0], yr[0], "left", "bottom"),
                BASIC: (xr[1], yr[0], "right", "bottom"),
            }
            for quadrant, (x, y, xanchor, yanchor) in corners.items():
                fig.add_annotation(
                    x=x,
                    y=y,
                    text=QUADRANT_TITLES[quadrant],
                    showarrow=False,
                    xanchor=xanchor,
                    yanchor=yanchor,
                    font=dict(size=11, color="#777777"),
                )

        fig.update_layout(
            title=dict(text=title),
            width=self._width,
            height=self._height,
            plot_bgcolor="white",
            xaxis=dict(title="Centrality", range=xr, showticklabels=False, ticks="", zeroline=False),
            yaxis=dict(title="Density", range=yr, showticklabels=False, ticks="", zeroline=False),
        )
        return fig

    def save(self, figure: go.Figure, path: str) -> None:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        figure.write_html(str(out))
        log.info("Thematic map written to %s", out)
