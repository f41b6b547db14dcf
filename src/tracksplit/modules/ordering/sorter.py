import logging
from datetime import datetime, timezone
from typing import List

from tracksplit.core.point import TrackPoint

logger = logging.getLogger(__name__)

# Earlier than any real (UTC-normalized) timestamp.
_BEFORE_ANY_TIME = datetime.min.replace(tzinfo=timezone.utc)


def verify_sorted(points: List[TrackPoint]) -> bool:
    """
    Returns True when timestamps are strictly increasing.
    Equal consecutive timestamps count as not sorted.
    """
    logger.info("Verifying list is sorted...")
    last_time = _BEFORE_ANY_TIME
    for i, point in enumerate(points):
        if point.timestamp <= last_time:
            logger.warning(" Warning, list is not sorted (point %d at %s).", i, point.timestamp.isoformat())
            return False
        last_time = point.timestamp
    logger.info(" OK")
    return True


def sort_points(points: List[TrackPoint]) -> List[TrackPoint]:
    """
    Returns a new list ordered by timestamp ascending.
    The sort is stable: points sharing a timestamp keep their input order,
    which decides which of them the quality filter keeps as reference.
    """
    logger.info("Sorting %d points by time...", len(points))
    return sorted(points, key=lambda p: p.timestamp)
