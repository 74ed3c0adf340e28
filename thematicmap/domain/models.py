"""Pure domain models for the strategic diagram.

Only NumPy is needed here: matrices are dense ``ndarray`` objects indexed
by an accompanying term list.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

from thematicmap.domain.errors import InvalidInputError

NEUTRAL_GRAY = "#D3D3D3"


# ── Networks ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TermNetwork:
    """Square co-occurrence matrix; the diagonal holds term occurrences."""

    terms: list[str]
    matrix: np.ndarray

    @property
    def size(self) -> int:
        return len(self.terms)

    def occurrences(self) -> np.ndarray:
        return np.diag(self.matrix).astype(float)


@dataclass(frozen=True)
class SimilarityMatrix:
    """Pairwise association strength in [0, 1], same index as the network."""

    terms: list[str]
    values: np.ndarray
    kind: str = "association"

    @property
    def size(self) -> int:
        return len(self.terms)


# ── Community detection output ──────────────────────────────────────────────

@dataclass
class CommunityPartition:
    """Membership produced by an external community detector.

    ``terms``, ``membership`` and ``colors`` are parallel lists.  Cluster ids
    are small positive integers, not necessarily contiguous.  A color may
    be ``None`` when the detector did not assign one; a short ``colors``
    list is padded with ``None``.
    """

    terms: list[str]
    membership: list[int]
    colors: list[str | None] = field(default_factory=list)
    algorithm: str = ""
    graph: Any = None  # detector-specific graph object, opaque to the core

    def __post_init__(self) -> None:
        if len(self.membership) != len(self.terms):
            raise InvalidInputError(
                f"Partition has {len(self.terms)} terms but "
                f"{len(self.membership)} membership entries"
            )
        if len(self.colors) > len(self.terms):
            raise InvalidInputError(
                f"Partition has {len(self.terms)} terms but {len(self.colors)} colors"
            )
        self.colors = list(self.colors) + [None] * (len(self.terms) - len(self.colors))

    @property
    def cluster_ids(self) -> list[int]:
        return sorted(set(self.membership))


@dataclass(frozen=True)
class AlignedTerms:
    """Partition restricted to the terms present in the similarity matrix.

    Ordered like the similarity matrix; ``index`` holds the row/column
    positions of each word in it.
    """

    words: list[str]
    groups: list[int]
    colors: list[str]
    index: np.ndarray

    def __len__(self) -> int:
        return len(self.words)


# ── Output records ──────────────────────────────────────────────────────────

@dataclass
class ClusterMetrics:
    """Raw per-cluster measures, computed on the full membership."""

    group: int
    members: list[int]  # positions into AlignedTerms
    centrality: float
    density: float
    label: str
    total_occurrences: float
    color: str
    top_words: str = ""


@dataclass
class ClusterRecord:
    """One plottable cluster of the strategic diagram."""

    cluster: int
    group: int
    centrality: float
    density: float
    rcentrality: float
    rdensity: float
    label: str
    frequency: float
    color: str
    words: str
    quadrant: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class WordRecord:
    """One term of the word table."""

    occurrences: float
    word: str
    cluster: int
    color: str
    cluster_label: str
    group: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Quadrant map ────────────────────────────────────────────────────────────

@dataclass
class MapPoint:
    """A cluster as consumed by the chart renderer."""

    cluster: int
    x: float
    y: float
    size_value: float  # log(frequency)
    color: str
    label: str  # empty when the cluster frequency is <= 1
    hover: str


@dataclass
class QuadrantMap:
    """Plot-ready structure: points, mean-rank crosshair, symmetric limits."""

    points: list[MapPoint]
    mean_centrality: float
    mean_density: float
    xlim: tuple[float, float]
    ylim: tuple[float, float]
    size: float = 0.5
    repel: bool = True

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["xlim"] = list(self.xlim)
        d["ylim"] = list(self.ylim)
        return d


@dataclass
class ThematicMapResult:
    """Final bundle of one pipeline invocation."""

    map: QuadrantMap
    clusters: list[ClusterRecord]
    words: list[WordRecord]
    nclust: int
    net: CommunityPartition | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; ``net`` is left out."""
        return {
            "clusters": [c.to_dict() for c in self.clusters],
            "words": [w.to_dict() for w in self.words],
            "nclust": self.nclust,
            "map": self.map.to_dict(),
        }
