"""Read a co-occurrence network from disk (JSON or CSV).

JSON layout::

    {"terms": ["a", "b"], "matrix": [[3, 1], [1, 2]]}

CSV layout: a header row with an empty first cell followed by the terms,
then one row per term starting with its name.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

import numpy as np

from thematicmap.domain.errors import InvalidInputError
from thematicmap.domain.models import TermNetwork

log = logging.getLogger(__name__)


def load_network(path: str) -> TermNetwork:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Network file not found: {path}")

    if p.suffix.lower() == ".csv":
        network = _load_csv(p)
    else:
        network = _load_json(p)

    log.info("Loaded network with %d terms from %s", network.size, p)
    return network


def _load_json(p: Path) -> TermNetwork:
    with open(p) as f:
        data = json.load(f)
    try:
        terms = [str(t) for t in data["terms"]]
        matrix = np.asarray(data["matrix"], dtype=float)
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"Malformed network file {p}: {exc}") from exc
    return TermNetwork(terms=terms, matrix=matrix)


def _load_csv(p: Path) -> TermNetwork:
    with open(p, newline="") as f:
        rows = [row for row in csv.reader(f) if row]
    if not rows:
        raise InvalidInputError(f"Empty network file: {p}")

    header = rows[0][1:]
    terms: list[str] = []
    values: list[list[float]] = []
    try:
        for row in rows[1:]:
            if len(row) != len(header) + 1:
                raise ValueError(f"row {row[0]!r} has {len(row) - 1} values")
            terms.append(row[0])
            values.append([float(v) for v in row[1:]])
    except ValueError as exc:
        raise InvalidInputError(f"Malformed network file {p}: {exc}") from exc

    if terms != header:
        raise InvalidInputError(f"Row and column terms differ in {p}")
    return TermNetwork(terms=terms, matrix=np.asarray(values, dtype=float))


def save_network(network: TermNetwork, path: str) -> None:
    """Write *network* in the JSON layout."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w") as f:
        json.dump({"terms": network.terms, "matrix": network.matrix.tolist()}, f)
