"""Service: rank transform and quadrant geometry of the strategic diagram."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy.stats import rankdata

from thematicmap.domain.models import ClusterRecord, MapPoint, QuadrantMap

MOTOR = "motor"
BASIC = "basic"
NICHE = "niche"
EMERGING = "emerging"

QUADRANT_TITLES = {
    MOTOR: "Motor Themes",
    BASIC: "Basic Themes",
    NICHE: "Niche Themes",
    EMERGING: "Emerging or Declining Themes",
}


def rank(values: Sequence[float]) -> list[float]:
    """Ascending 1..K ranks; equal values share their averaged rank."""
    if len(values) == 0:
        return []
    return [float(r) for r in rankdata(np.asarray(values, dtype=float), method="average")]


def symmetric_limits(ranks: Sequence[float]) -> tuple[float, float, float]:
    """Return ``(mean, lower, upper)`` with the mean exactly centred."""
    mean = float(np.mean(ranks))
    spread = max(mean - min(ranks), max(ranks) - mean)
    return mean, mean - spread, mean + spread


def classify(rcentrality: float, rdensity: float, mean_c: float, mean_d: float) -> str:
    if rcentrality >= mean_c:
        return MOTOR if rdensity >= mean_d else BASIC
    return NICHE if rdensity >= mean_d else EMERGING


class QuadrantMapper:
    """Place cluster records on the mean-rank crosshair."""

    def __init__(self, *, size: float = 0.5, repel: bool = True):
        self._size = size
        self._repel = repel

    def assign_ranks(self, records: list[ClusterRecord]) -> None:
        """Fill ``rcentrality``/``rdensity`` across all *records*."""
        rc = rank([r.centrality for r in records])
        rd = rank([r.density for r in records])
        for rec, c, d in zip(records, rc, rd):
            rec.rcentrality = c
            rec.rdensity = d

    def build_map(self, records: list[ClusterRecord]) -> QuadrantMap:
        """Compute crosshair, axis limits and plot points; tags quadrants."""
        mean_c, xlo, xhi = symmetric_limits([r.rcentrality for r in records])
        mean_d, ylo, yhi = symmetric_limits([r.rdensity for r in records])

        points: list[MapPoint] = []
        for rec in records:
            rec.quadrant = classify(rec.rcentrality, rec.rdensity, mean_c, mean_d)
            points.append(
                MapPoint(
                    cluster=rec.cluster,
                    x=rec.rcentrality,
                    y=rec.rdensity,
                    size_value=math.log(rec.frequency) if rec.frequency > 0 else 0.0,
                    color=rec.color,
                    label=rec.label.lower() if rec.frequency > 1 else "",
                    hover=rec.words,
                )
            )

        return QuadrantMap(
            points=points,
            mean_centrality=mean_c,
            mean_density=mean_d,
            xlim=(xlo, xhi),
            ylim=(ylo, yhi),
            size=self._size,
            repel=self._repel,
        )
