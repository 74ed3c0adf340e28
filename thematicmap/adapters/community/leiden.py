"""Community adapter: Leiden algorithm (via leidenalg + igraph)."""

from __future__ import annotations

from typing import Any

from thematicmap.adapters.community.igraph_base import IgraphCommunityDetection


class LeidenCommunityDetection(IgraphCommunityDetection):
    """Weighted Leiden community detection."""

    algorithm = "leiden"

    def __init__(self, resolution: float = 1.0):
        self._resolution = resolution

    def _membership(self, graph: Any, *, seed: int | None) -> list[int]:
        import leidenalg  # lazy

        partition = leidenalg.find_partition(
            graph,
            leidenalg.RBConfigurationVertexPartition,
            weights="weight" if graph.ecount() else None,
            resolution_parameter=self._resolution,
            seed=seed,
        )
        return list(partition.membership)
