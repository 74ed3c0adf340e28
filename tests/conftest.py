"""Shared test fixtures — mock detector and sample networks."""

from __future__ import annotations

import numpy as np
import pytest

from thematicmap.domain.models import CommunityPartition, SimilarityMatrix, TermNetwork
from thematicmap.ports.community_detection import CommunityDetectionPort


# ── Mock community detection ──


class MockCommunityDetection(CommunityDetectionPort):
    """Returns a fixed term → cluster assignment."""

    def __init__(self, assignments: dict[str, int], colors: dict[str, str] | None = None):
        self._assignments = assignments
        self._colors = colors or {}
        self.calls = 0

    def detect(
        self,
        similarity: SimilarityMatrix,
        occurrences: np.ndarray,
        *,
        n: int,
        seed: int | None = None,
    ) -> CommunityPartition:
        self.calls += 1
        terms = list(self._assignments)
        return CommunityPartition(
            terms=terms,
            membership=[self._assignments[t] for t in terms],
            colors=[self._colors.get(t) for t in terms],
            algorithm="mock",
        )


# ── Sample data ──

FIELD_TERMS = [
    "Machine Learning",
    "Deep Learning",
    "Neural Networks",
    "Bibliometrics",
    "Citation Analysis",
    "Peer Review",
]

FIELD_MATRIX = [
    [12, 6, 5, 2, 1, 0],
    [6, 9, 4, 0, 0, 0],
    [5, 4, 7, 0, 0, 1],
    [2, 0, 0, 10, 6, 3],
    [1, 0, 0, 6, 8, 2],
    [0, 0, 1, 3, 2, 4],
]

# Cluster ids deliberately not contiguous.
FIELD_ASSIGNMENTS = {
    "Machine Learning": 1,
    "Deep Learning": 1,
    "Neural Networks": 1,
    "Bibliometrics": 3,
    "Citation Analysis": 3,
    "Peer Review": 3,
}


@pytest.fixture
def field_network():
    """Two themes (ML and science-of-science) with weak cross links."""
    return TermNetwork(terms=list(FIELD_TERMS), matrix=np.array(FIELD_MATRIX, dtype=float))


@pytest.fixture
def field_detector():
    return MockCommunityDetection(
        dict(FIELD_ASSIGNMENTS),
        colors={t: ("#E41A1C" if g == 1 else "#377EB8") for t, g in FIELD_ASSIGNMENTS.items()},
    )


@pytest.fixture
def pair_and_isolate():
    """term1–term2 co-occur strongly, term3 is frequent but never co-occurs."""
    return TermNetwork(
        terms=["term1", "term2", "term3"],
        matrix=np.array([[10, 8, 0], [8, 10, 0], [0, 0, 20]], dtype=float),
    )


@pytest.fixture
def pair_and_isolate_partition():
    return CommunityPartition(
        terms=["term1", "term2", "term3"],
        membership=[1, 1, 2],
        colors=["#E41A1C", "#E41A1C", "#377EB8"],
    )


@pytest.fixture
def make_detector():
    """Factory for :class:`MockCommunityDetection`."""
    return MockCommunityDetection
