import logging
from datetime import date, timedelta
from typing import List, Optional

from tracksplit.core.chunk import OutputChunk
from tracksplit.core.point import TrackPoint

logger = logging.getLogger(__name__)


def local_day(point: TrackPoint, tz_offset_hours: float = 0.0) -> date:
    """Calendar day of the point after shifting its timestamp by tz_offset_hours."""
    return (point.timestamp + timedelta(hours=tz_offset_hours)).date()


class DatePartitioner:
    """
    Splits a time-sorted list of points into one chunk per local calendar day.

    Input must be sorted ascending. Day groups are only contiguous for sorted
    input; unsorted input produces repeated day keys and is not supported.
    """

    def __init__(self, tz_offset_hours: float = 0.0, prefix: Optional[str] = None):
        self.tz_offset_hours = tz_offset_hours
        self.prefix = prefix

    def partition(self, points: List[TrackPoint]) -> List[OutputChunk]:
        logger.info("Splitting by date...")
        chunks: List[OutputChunk] = []
        if not points:
            return chunks

        current_day = local_day(points[0], self.tz_offset_hours)
        start = 0
        for i, point in enumerate(points):
            day = local_day(point, self.tz_offset_hours)
            if day != current_day:
                chunks.append(OutputChunk(key=current_day.isoformat(), points=points[start:i], prefix=self.prefix))
                current_day = day
                start = i

        chunks.append(OutputChunk(key=current_day.isoformat(), points=points[start:], prefix=self.prefix))
        return chunks
