"""Error kinds raised by the thematic-map pipeline.

All of them are terminal for the current invocation: the pipeline is a
pure computation over its inputs, so nothing is retried and no partial
result is returned.
"""

from __future__ import annotations


class ThematicMapError(ValueError):
    """Base class for every pipeline failure."""


class InvalidInputError(ThematicMapError):
    """Malformed network (not square, negative weights) or bad option."""


class AlignmentError(ThematicMapError):
    """No term is shared by the network and the community partition."""


class EmptyResultError(ThematicMapError):
    """No cluster survives the minimum-frequency filter."""

    def __init__(self, minfreq: int, message: str | None = None):
        self.minfreq = minfreq
        super().__init__(
            message
            or (
                f"Not enough co-occurring terms reach minfreq={minfreq}; "
                "lower minfreq or increase n."
            )
        )
