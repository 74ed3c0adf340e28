"""Service: centrality, density and labels of each thematic cluster.

Centrality is the external linkage of a cluster (sum of similarities
between its members and every other aligned term); density is its
internal cohesion (sum of similarities among members, per member).
Both are computed on the complete membership, before any frequency
filter is applied.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from thematicmap.domain.models import AlignedTerms, ClusterMetrics, SimilarityMatrix
from thematicmap.services.word_table import top_words

log = logging.getLogger(__name__)

LABEL_SEPARATOR = ";"


def cluster_label(words: list[str], occurrences: np.ndarray, max_words: int = 3) -> str:
    """Join the most frequent word(s); ties keep the first *max_words* met."""
    top = float(np.max(occurrences))
    tied = [w for w, o in zip(words, occurrences) if o == top]
    return LABEL_SEPARATOR.join(tied[:max_words])


class ClusterMetricsService:
    """Compute :class:`ClusterMetrics` for every non-empty cluster."""

    def __init__(
        self,
        *,
        centrality_scale: float = 10.0,
        density_scale: float = 100.0,
        label_words: int = 3,
        top_words: int = 10,
    ):
        self._centrality_scale = centrality_scale
        self._density_scale = density_scale
        self._label_words = label_words
        self._top_words = top_words

    def compute(
        self,
        aligned: AlignedTerms,
        similarity: SimilarityMatrix,
        occurrences: np.ndarray,
        cluster_ids: Iterable[int] | None = None,
    ) -> list[ClusterMetrics]:
        """Return one entry per cluster, ordered by cluster id.

        *occurrences* is parallel to ``aligned.words``.  Cluster ids with no
        aligned member are skipped.
        """
        sub = similarity.values[np.ix_(aligned.index, aligned.index)]
        groups = np.asarray(aligned.groups)
        occurrences = np.asarray(occurrences, dtype=float)

        if cluster_ids is None:
            cluster_ids = set(aligned.groups)

        results: list[ClusterMetrics] = []
        for cid in sorted(set(cluster_ids)):
            inside = groups == cid
            members = np.flatnonzero(inside)
            if members.size == 0:
                log.debug("Cluster %d has no aligned member, skipped", cid)
                continue

            centrality = float(sub[np.ix_(inside, ~inside)].sum()) * self._centrality_scale
            density = (
                float(sub[np.ix_(inside, inside)].sum()) / members.size * self._density_scale
            )

            words = [aligned.words[i] for i in members]
            occ = occurrences[members]
            metrics = ClusterMetrics(
                group=int(cid),
                members=members.tolist(),
                centrality=centrality,
                density=density,
                label=cluster_label(words, occ, self._label_words),
                total_occurrences=float(occ.sum()),
                color=aligned.colors[members[0]],
                top_words=top_words(words, occ, self._top_words),
            )
            log.debug(
                "Cluster %d (%s): centrality=%.4f density=%.4f size=%d",
                cid,
                metrics.label,
                centrality,
                density,
                members.size,
            )
            results.append(metrics)

        return results
