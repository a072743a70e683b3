"""Split service identifiers into DescribeServices-sized batches."""

from __future__ import annotations

from collections.abc import Sequence

BATCH_SIZE = 10


def chunk(identifiers: Sequence[str], size: int = BATCH_SIZE) -> list[list[str]]:
    """Return consecutive batches of at most `size` identifiers, in input order."""
    return [list(identifiers[i : i + size]) for i in range(0, len(identifiers), size)]
