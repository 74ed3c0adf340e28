"""Service: build the strategic diagram of a co-occurrence network.

Pipeline (forward only):
  normalise similarity → detect communities → align partition →
  cluster metrics + ranks → word table + minfreq filter → quadrant map.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from thematicmap.domain.errors import EmptyResultError, InvalidInputError
from thematicmap.domain.models import (
    ClusterRecord,
    CommunityPartition,
    TermNetwork,
    ThematicMapResult,
    WordRecord,
)
from thematicmap.ports.community_detection import CommunityDetectionPort
from thematicmap.services.alignment import align_partition
from thematicmap.services.cluster_metrics import ClusterMetricsService
from thematicmap.services.quadrants import QuadrantMapper
from thematicmap.services.similarity import normalize_similarity
from thematicmap.services.word_table import build_word_table

log = logging.getLogger(__name__)


class ThematicMapService:
    """Orchestrate the thematic-map pipeline for one network."""

    def __init__(
        self,
        detector: CommunityDetectionPort | None = None,
        *,
        n: int = 250,
        minfreq: float = 5,
        seed: int | None = None,
        similarity: str = "association",
        lowercase: bool = True,
        centrality_scale: float = 10.0,
        density_scale: float = 100.0,
        label_words: int = 3,
        top_words: int = 10,
        size: float = 0.5,
        repel: bool = True,
    ):
        if n < 1:
            raise InvalidInputError(f"n must be >= 1, got {n}")
        if minfreq < 0:
            raise InvalidInputError(f"minfreq must be >= 0, got {minfreq}")
        self._detector = detector
        self._n = n
        self._minfreq = minfreq
        self._seed = seed
        self._similarity = similarity
        self._lowercase = lowercase
        self._metrics = ClusterMetricsService(
            centrality_scale=centrality_scale,
            density_scale=density_scale,
            label_words=label_words,
            top_words=top_words,
        )
        self._mapper = QuadrantMapper(size=size, repel=repel)

    # ── public ──

    def build(self, network: TermNetwork) -> ThematicMapResult:
        """Detect communities on *network* and build its thematic map."""
        if self._detector is None:
            raise InvalidInputError("No community detector configured")
        return self._run(network, None)

    def build_from_partition(
        self,
        network: TermNetwork,
        partition: CommunityPartition,
    ) -> ThematicMapResult:
        """Build the map from a partition computed elsewhere."""
        return self._run(network, partition)

    # ── pipeline ──

    def _run(
        self,
        network: TermNetwork,
        partition: CommunityPartition | None,
    ) -> ThematicMapResult:
        similarity = normalize_similarity(network, kind=self._similarity)
        occurrences = network.occurrences()

        if partition is None:
            partition = self._detector.detect(
                similarity, occurrences, n=self._n, seed=self._seed
            )
            log.info(
                "Detected %d clusters over %d terms (%s)",
                len(partition.cluster_ids),
                len(partition.terms),
                partition.algorithm or "external",
            )

        aligned = align_partition(partition, similarity, lowercase=self._lowercase)
        aligned_occ = occurrences[aligned.index]

        metrics = self._metrics.compute(
            aligned, similarity, aligned_occ, partition.cluster_ids
        )
        records = [
            ClusterRecord(
                cluster=m.group,
                group=m.group,
                centrality=m.centrality,
                density=m.density,
                rcentrality=0.0,
                rdensity=0.0,
                label=m.label,
                frequency=m.total_occurrences,
                color=m.color,
                words=m.top_words,
            )
            for m in metrics
        ]
        self._mapper.assign_ranks(records)

        labels = {m.group: m.label for m in metrics}
        words = build_word_table(aligned, aligned_occ, labels, minfreq=self._minfreq)

        surviving = self._filter_clusters(records, words)
        if not surviving:
            raise EmptyResultError(self._minfreq)
        log.info(
            "%d of %d clusters reach minfreq=%s",
            len(surviving),
            len(records),
            self._minfreq,
        )

        self._renumber(surviving, words)
        quadrant_map = self._mapper.build_map(surviving)

        return ThematicMapResult(
            map=quadrant_map,
            clusters=surviving,
            words=words,
            nclust=len(surviving),
            net=partition,
        )

    @staticmethod
    def _filter_clusters(
        records: list[ClusterRecord],
        words: list[WordRecord],
    ) -> list[ClusterRecord]:
        """Keep clusters whose label is still present in the word table."""
        present_labels = {w.cluster_label for w in words}
        present_groups = {w.group for w in words}
        return [
            r for r in records if r.label in present_labels and r.group in present_groups
        ]

    @staticmethod
    def _renumber(records: list[ClusterRecord], words: list[WordRecord]) -> None:
        """Sequential 1..M ids by ascending group; frequency from the word table."""
        groups = sorted({r.group for r in records})
        new_id = {g: i for i, g in enumerate(groups, start=1)}

        freq: dict[int, float] = defaultdict(float)
        kept: list[WordRecord] = []
        for w in words:
            if w.group in new_id:
                w.cluster = new_id[w.group]
                freq[w.group] += w.occurrences
                kept.append(w)
        words[:] = kept

        for r in records:
            r.cluster = new_id[r.group]
            r.frequency = freq[r.group]
