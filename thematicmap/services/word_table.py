"""Service: per-word detail table and per-cluster word annotations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from thematicmap.domain.models import AlignedTerms, WordRecord

log = logging.getLogger(__name__)


def _fmt_count(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def top_words(
    words: Sequence[str],
    occurrences: Sequence[float],
    limit: int = 10,
) -> str:
    """Render the *limit* most frequent words as ``"word count"`` lines.

    Words occurring only once are left out.  Equal counts keep their
    original order, and every word tied with the last one kept is kept
    too, so the annotation can run past *limit* lines.
    """
    pairs = [(w, float(o)) for w, o in zip(words, occurrences) if o > 1]
    pairs.sort(key=lambda p: -p[1])
    if len(pairs) > limit:
        cutoff = pairs[limit - 1][1]
        pairs = [p for p in pairs if p[1] >= cutoff]
    return "\n".join(f"{w} {_fmt_count(o)}" for w, o in pairs)


def build_word_table(
    aligned: AlignedTerms,
    occurrences: np.ndarray,
    labels: dict[int, str],
    *,
    minfreq: float,
) -> list[WordRecord]:
    """Word records with occurrence >= *minfreq*, sorted by cluster id.

    *occurrences* is parallel to ``aligned.words``.  The ``cluster`` field
    still holds the detector's group id here; the builder renumbers it.
    Records whose color could not be resolved are dropped.
    """
    records: list[WordRecord] = []
    dropped = 0
    for word, group, color, occ in zip(aligned.words, aligned.groups, aligned.colors, occurrences):
        if occ < minfreq:
            continue
        if not color:
            dropped += 1
            continue
        records.append(
            WordRecord(
                occurrences=float(occ),
                word=word,
                cluster=group,
                color=color,
                cluster_label=labels.get(group, ""),
                group=group,
            )
        )
    if dropped:
        log.warning("Dropped %d words without a color", dropped)

    records.sort(key=lambda r: r.group)
    return records
