import logging
import math
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from .errors import TrackParseError
from .point import TrackPoint

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _to_float(value: Any, name: str, source, index: int) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise TrackParseError(f"{name} is not numeric: {value!r}", source, index) from None
    if not math.isfinite(number):
        raise TrackParseError(f"{name} is not finite: {value!r}", source, index)
    return number


def _to_optional_float(value: Any, name: str, source, index: int) -> Optional[float]:
    if _is_blank(value):
        return None
    return _to_float(value, name, source, index)


def _to_timestamp(value: Any, source, index: int):
    if _is_blank(value):
        raise TrackParseError("time is missing", source, index)
    try:
        ts = pd.to_datetime(value, utc=True)
    except (TypeError, ValueError, OverflowError):
        raise TrackParseError(f"time is not parseable: {value!r}", source, index) from None
    if pd.isna(ts):
        raise TrackParseError(f"time is not parseable: {value!r}", source, index)
    return ts.to_pydatetime()


def to_track_point(record: Mapping[str, Any], source: Optional[str | Path] = None, index: int = 0) -> TrackPoint:
    """
    Converts one input record ({lat, lon, time, ele?, hdop?}) into a TrackPoint.

    Times are normalized to UTC-aware datetimes (naive times are read as UTC)
    so that points from different files always compare. Times are parsed by
    pandas, whose nanosecond timestamps only span the years 1677 to 2262; a time
    outside that range is reported as not parseable and drops the file.

    Raises:
        TrackParseError: for a missing or malformed coordinate, time, elevation or HDOP.
    """
    if _is_blank(record.get("lat")) or _is_blank(record.get("lon")):
        raise TrackParseError("lat/lon is missing", source, index)

    return TrackPoint(
        lat=_to_float(record["lat"], "lat", source, index),
        lon=_to_float(record["lon"], "lon", source, index),
        timestamp=_to_timestamp(record.get("time"), source, index),
        elevation=_to_optional_float(record.get("ele"), "ele", source, index),
        hdop=_to_optional_float(record.get("hdop"), "hdop", source, index),
    )


def records_to_points(records: Iterable[Mapping[str, Any]], source: Optional[str | Path] = None) -> List[TrackPoint]:
    """Converts the records of one file, keeping their order."""
    return [to_track_point(record, source, i) for i, record in enumerate(records)]


def merge_point_lists(point_lists: Iterable[List[TrackPoint]]) -> List[TrackPoint]:
    """
    Concatenates per-file point lists in the order given.
    Each list keeps its internal order; nothing is said about order across lists.
    """
    merged: List[TrackPoint] = []
    for points in point_lists:
        merged.extend(points)
    return merged


class TrackLoader:
    """
    Reads a list of track files and merges their points into one list.
    A file that fails to parse or cannot be read is logged and skipped; the
    other files still load.
    """

    def __init__(self, reader_factory=None):
        """
        Args:
            reader_factory: Callable taking a path and returning an object with a
                            `records()` iterator. Defaults to suffix-based dispatch.
        """
        if reader_factory is None:
            from tracksplit.io.readers import reader_for
            reader_factory = reader_for
        self.reader_factory = reader_factory
        self.failed: List[Path] = []

    def load_file(self, path: str | Path) -> List[TrackPoint]:
        reader = self.reader_factory(Path(path))
        return records_to_points(reader.records(), source=path)

    def load(self, paths: Iterable[str | Path]) -> List[TrackPoint]:
        logger.info("Reading source track files...")
        per_file = []
        for path in paths:
            logger.info(" Parsing file: %s", path)
            try:
                per_file.append(self.load_file(path))
            except (TrackParseError, OSError) as e:
                logger.error(" Skipping %s: %s", path, e)
                self.failed.append(Path(path))

        points = merge_point_lists(per_file)
        logger.info(" Found %d points", len(points))
        return points
