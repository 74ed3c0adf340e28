"""Port: community detection on a weighted term graph."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from thematicmap.domain.models import CommunityPartition, SimilarityMatrix


class CommunityDetectionPort(ABC):
    """Detect thematic clusters in a similarity graph."""

    @abstractmethod
    def detect(
        self,
        similarity: SimilarityMatrix,
        occurrences: np.ndarray,
        *,
        n: int,
        seed: int | None = None,
    ) -> CommunityPartition:
        """Return membership (and optional color) for the top-*n* terms.

        *occurrences* is parallel to ``similarity.terms`` and is used to
        pick the *n* most frequent terms.  The graph is weighted and has no
        self-loops; isolated terms are kept.
        """
