"""Service: co-occurrence normalisation.

Turns a raw co-occurrence network into a similarity matrix with one of
the classic co-word indices.  The diagonal keeps each term's normalised
self-association (1/w_ii for the association index), which enters
cluster density; raw occurrences are always read from the network.
"""

from __future__ import annotations

import logging

import numpy as np

from thematicmap.domain.errors import InvalidInputError
from thematicmap.domain.models import SimilarityMatrix, TermNetwork

log = logging.getLogger(__name__)

SIMILARITY_KINDS = ("association", "inclusion", "jaccard", "salton", "equivalence")


def validate_network(network: TermNetwork) -> None:
    """Raise :class:`InvalidInputError` unless *network* is a usable matrix."""
    m = np.asarray(network.matrix)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise InvalidInputError(f"Network matrix must be square, got shape {m.shape}")
    if m.shape[0] != len(network.terms):
        raise InvalidInputError(
            f"Network has {m.shape[0]} rows but {len(network.terms)} terms"
        )
    if m.shape[0] == 0:
        raise InvalidInputError("Network is empty")
    if len(set(network.terms)) != len(network.terms):
        raise InvalidInputError("Network terms must be unique")
    if not np.all(np.isfinite(m)):
        raise InvalidInputError("Network contains non-finite weights")
    if np.any(m < 0):
        raise InvalidInputError("Network contains negative weights")
    if not np.allclose(m, m.T):
        raise InvalidInputError("Network matrix must be symmetric")


def normalize_similarity(
    network: TermNetwork,
    kind: str = "association",
) -> SimilarityMatrix:
    """Return the *kind* similarity of every term pair.

    ``association`` is w_ij / (w_ii * w_jj); ``inclusion`` divides by
    min(w_ii, w_jj), ``jaccard`` by w_ii + w_jj - w_ij, ``salton`` by
    sqrt(w_ii * w_jj) and ``equivalence`` squares the salton index.
    Ratios with a zero denominator are 0 and results are clipped to [0, 1].
    """
    validate_network(network)
    if kind not in SIMILARITY_KINDS:
        raise InvalidInputError(
            f"Unknown similarity '{kind}'; expected one of {', '.join(SIMILARITY_KINDS)}"
        )

    w = np.asarray(network.matrix, dtype=float)
    d = np.diag(w)

    if kind == "association":
        denom = np.outer(d, d)
    elif kind == "inclusion":
        denom = np.minimum.outer(d, d)
    elif kind == "jaccard":
        denom = np.add.outer(d, d) - w
    else:
        denom = np.sqrt(np.outer(d, d))

    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(denom > 0, w / denom, 0.0)
    if kind == "equivalence":
        s = s ** 2

    s = np.clip(s, 0.0, 1.0)

    log.debug("Normalised %d terms with %s similarity", network.size, kind)
    return SimilarityMatrix(terms=list(network.terms), values=s, kind=kind)
