"""Shared igraph plumbing for the community-detection adapters."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import numpy as np

from thematicmap.domain.models import CommunityPartition, SimilarityMatrix
from thematicmap.ports.community_detection import CommunityDetectionPort

# ── Cluster palette ─────────────────────────────────────────────────────────

CLUSTER_COLOURS = [
    "#E41A1C",  # red
    "#377EB8",  # blue
    "#4DAF4A",  # green
    "#984EA3",  # purple
    "#FF7F00",  # orange
    "#A65628",  # brown
    "#F781BF",  # pink
    "#999999",  # grey
    "#66C2A5",  # teal
    "#FC8D62",  # salmon
    "#8DA0CB",  # lavender
    "#E78AC3",  # orchid
]


def cluster_colour(cluster_id: int) -> str:
    return CLUSTER_COLOURS[(cluster_id - 1) % len(CLUSTER_COLOURS)]


def top_terms(occurrences: np.ndarray, n: int) -> np.ndarray:
    """Indices of the *n* most frequent terms, in their original order."""
    order = np.argsort(-np.asarray(occurrences, dtype=float), kind="stable")
    return np.sort(order[:n])


class IgraphCommunityDetection(CommunityDetectionPort):
    """Build a weighted igraph graph and delegate the partitioning."""

    algorithm = ""

    def detect(
        self,
        similarity: SimilarityMatrix,
        occurrences: np.ndarray,
        *,
        n: int,
        seed: int | None = None,
    ) -> CommunityPartition:
        import igraph as ig  # lazy

        keep = top_terms(occurrences, n)
        terms = [similarity.terms[i] for i in keep]
        sub = similarity.values[np.ix_(keep, keep)]

        g = ig.Graph(n=len(terms), directed=False)
        g.vs["name"] = terms
        rows, cols = np.nonzero(np.triu(sub, k=1))
        if rows.size:
            g.add_edges(list(zip(rows.tolist(), cols.tolist())))
            g.es["weight"] = sub[rows, cols].tolist()

        raw = self._membership(g, seed=seed)

        # Detector ids start at 0; expose 1-based ids ordered by first appearance.
        relabel: dict[int, int] = {}
        membership = [relabel.setdefault(m, len(relabel) + 1) for m in raw]
        colours: list[str | None] = [cluster_colour(m) for m in membership]
        g.vs["color"] = colours

        return CommunityPartition(
            terms=terms,
            membership=membership,
            colors=colours,
            algorithm=self.algorithm,
            graph=g,
        )

    @abstractmethod
    def _membership(self, graph: Any, *, seed: int | None) -> list[int]:
        """Return one community index per vertex of *graph*."""
