import logging
from typing import List

from tracksplit.core.config import DEFAULT_MAX_ACCURACY, DEFAULT_MIN_MOVEMENT
from tracksplit.core.point import TrackPoint

logger = logging.getLogger(__name__)

# Far outside any valid lat/lon, so the first point always counts as moved.
_NO_REFERENCE = 1000.0


def moved_enough(lat: float, lon: float, ref_lat: float, ref_lon: float, min_movement: float) -> bool:
    """
    Component-wise movement test: either coordinate delta must exceed min_movement.
    This is a flat degree threshold, not a geodesic distance.
    """
    return abs(lat - ref_lat) > min_movement or abs(lon - ref_lon) > min_movement


class QualityFilter:
    """
    Drops points that did not move far enough from the last kept point and,
    optionally, points without an acceptable HDOP.
    """

    def __init__(
        self,
        min_movement: float = DEFAULT_MIN_MOVEMENT,
        max_accuracy: float = DEFAULT_MAX_ACCURACY,
        accuracy_required: bool = False,
    ):
        """
        Args:
            min_movement: Latitude or longitude delta (degrees) that must be exceeded.
            max_accuracy: HDOP must be strictly below this value.
            accuracy_required: Enables the HDOP test. When enabled, points with no
                               HDOP at all are rejected.
        """
        if min_movement < 0:
            raise ValueError("min_movement must not be negative")
        self.min_movement = min_movement
        self.max_accuracy = max_accuracy
        self.accuracy_required = accuracy_required

    def accuracy_ok(self, point: TrackPoint) -> bool:
        if not self.accuracy_required:
            return True
        # Unknown accuracy is treated as unacceptable.
        return point.has_hdop and point.hdop < self.max_accuracy

    def filter(self, points: List[TrackPoint]) -> List[TrackPoint]:
        """
        Single forward pass. Each kept point becomes the reference for the next test.
        Returns a new list; order is preserved.
        """
        logger.info("Filtering points...")
        kept: List[TrackPoint] = []
        last_lat = _NO_REFERENCE
        last_lon = _NO_REFERENCE

        for point in points:
            if not moved_enough(point.lat, point.lon, last_lat, last_lon, self.min_movement):
                continue
            if not self.accuracy_ok(point):
                continue
            kept.append(point)
            last_lat = point.lat
            last_lon = point.lon

        logger.info(" Kept %d of %d", len(kept), len(points))
        return kept
