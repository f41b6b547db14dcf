import logging
from typing import List, Optional

from tracksplit.core.chunk import OutputChunk
from tracksplit.core.config import DEFAULT_MAX_POINTS
from tracksplit.core.point import TrackPoint

logger = logging.getLogger(__name__)


def chunk_key(index: int) -> str:
    """1-based chunk index, zero-padded to at least two digits."""
    return f"{index:02d}"


class SizePartitioner:
    """
    Splits points into consecutive chunks of at most max_points, ignoring dates.
    The input list is only sliced, never consumed.
    """

    def __init__(self, max_points: int = DEFAULT_MAX_POINTS, prefix: Optional[str] = None):
        if max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {max_points}")
        self.max_points = max_points
        self.prefix = prefix

    def partition(self, points: List[TrackPoint]) -> List[OutputChunk]:
        logger.info("Splitting by size (%d)...", self.max_points)
        return [
            OutputChunk(key=chunk_key(n), points=points[start:start + self.max_points], prefix=self.prefix)
            for n, start in enumerate(range(0, len(points), self.max_points), start=1)
        ]
