"""Service: align a community partition with the similarity matrix index."""

from __future__ import annotations

import logging

import numpy as np

from thematicmap.domain.errors import AlignmentError
from thematicmap.domain.models import (
    NEUTRAL_GRAY,
    AlignedTerms,
    CommunityPartition,
    SimilarityMatrix,
)

log = logging.getLogger(__name__)


def align_partition(
    partition: CommunityPartition,
    similarity: SimilarityMatrix,
    *,
    lowercase: bool = True,
) -> AlignedTerms:
    """Intersect partition terms with matrix terms, in matrix order.

    With *lowercase* both sides are lower-cased before matching, so "AI"
    in the network and "ai" in the partition are the same term.  Terms
    without a color get :data:`NEUTRAL_GRAY`.
    """
    norm = str.lower if lowercase else (lambda t: t)

    by_term: dict[str, tuple[int, str]] = {}
    for term, group, color in zip(partition.terms, partition.membership, partition.colors):
        key = norm(term)
        if key in by_term:
            log.warning("Duplicate partition term %r ignored", term)
            continue
        by_term[key] = (int(group), color or NEUTRAL_GRAY)

    words: list[str] = []
    groups: list[int] = []
    colors: list[str] = []
    index: list[int] = []
    seen: set[str] = set()
    for pos, term in enumerate(similarity.terms):
        key = norm(term)
        if key in seen or key not in by_term:
            continue
        seen.add(key)
        group, color = by_term[key]
        words.append(key)
        groups.append(group)
        colors.append(color)
        index.append(pos)

    if not words:
        raise AlignmentError(
            "No term is shared by the network and the community partition"
        )

    log.info(
        "Aligned %d of %d partition terms with the network",
        len(words),
        len(partition.terms),
    )
    return AlignedTerms(
        words=words,
        groups=groups,
        colors=colors,
        index=np.asarray(index, dtype=int),
    )
