"""Community adapter: Louvain modularity optimisation (via python-igraph)."""

from __future__ import annotations

import random
from typing import Any

from thematicmap.adapters.community.igraph_base import IgraphCommunityDetection


class LouvainCommunityDetection(IgraphCommunityDetection):
    """Weighted multilevel (Louvain) community detection."""

    algorithm = "louvain"

    def __init__(self, resolution: float = 1.0):
        self._resolution = resolution

    def _membership(self, graph: Any, *, seed: int | None) -> list[int]:
        import igraph as ig  # lazy

        # igraph draws from a module-wide generator; scope the seeded one to this call
        ig.set_random_number_generator(random.Random(seed) if seed is not None else random)
        try:
            clustering = graph.community_multilevel(
                weights="weight" if graph.ecount() else None,
                resolution=self._resolution,
            )
        finally:
            ig.set_random_number_generator(random)
        return list(clustering.membership)
