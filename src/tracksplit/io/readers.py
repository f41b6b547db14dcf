import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

import gpxpy
import gpxpy.gpx
import pandas as pd

from tracksplit.core.errors import TrackParseError

logger = logging.getLogger(__name__)

TRACK_EXTENSIONS = (".gpx", ".csv")


def discover_track_files(source_dir: str | Path, extensions: Sequence[str] = TRACK_EXTENSIONS) -> List[Path]:
    """
    Lists the track files directly inside source_dir, sorted by name.
    A missing directory gives an empty list.
    """
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        logger.warning("Source directory %s does not exist.", source_dir)
        return []

    suffixes = {ext.lower() for ext in extensions}
    return sorted(p for p in source_dir.iterdir() if p.is_file() and p.suffix.lower() in suffixes)


class GpxTrackReader:
    """
    Emits one record per <trkpt>, walking tracks and segments in document order.
    """

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)

    def records(self) -> Iterator[Dict]:
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                gpx = gpxpy.parse(f)
        except (gpxpy.gpx.GPXException, UnicodeDecodeError) as e:
            raise TrackParseError(f"not a readable GPX file ({e})", self.filepath) from e

        for track in gpx.tracks:
            for segment in track.segments:
                for pt in segment.points:
                    yield {
                        "lat": pt.latitude,
                        "lon": pt.longitude,
                        "time": pt.time.isoformat() if pt.time is not None else None,
                        "ele": pt.elevation,
                        "hdop": pt.horizontal_dilution,
                    }


class CsvTrackReader:
    """
    Reads a CSV tracklog. Every column is kept as text so that the point loader
    does the numeric and time conversion; empty cells are absent values.
    """

    def __init__(
        self,
        filepath: str | Path,
        sep: str = ',',
        col_mapping: Optional[Dict[str, str]] = None,
    ):
        self.filepath = Path(filepath)
        self.sep = sep

        self.mapping = col_mapping or {
            'lat': 'lat',
            'lon': 'lon',
            'time': 'time',
            'ele': 'ele',
            'hdop': 'hdop'
        }

    def records(self) -> Iterator[Dict]:
        try:
            df = pd.read_csv(self.filepath, sep=self.sep, dtype=str, keep_default_na=False)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise TrackParseError(f"not a readable CSV file ({e})", self.filepath) from e

        missing = [self.mapping[k] for k in ('lat', 'lon', 'time') if self.mapping.get(k) not in df.columns]
        if missing:
            raise TrackParseError(f"CSV is missing required columns {missing}. Found: {list(df.columns)}", self.filepath)

        optional = {k: self.mapping.get(k) for k in ('ele', 'hdop')}
        for _, row in df.iterrows():
            record = {
                'lat': row[self.mapping['lat']],
                'lon': row[self.mapping['lon']],
                'time': row[self.mapping['time']],
            }
            for key, column in optional.items():
                record[key] = row[column] if column in df.columns else None
            yield record


def reader_for(path: str | Path):
    """Picks a reader by file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".gpx":
        return GpxTrackReader(path)
    if suffix == ".csv":
        return CsvTrackReader(path)
    raise TrackParseError(f"unsupported track file type '{suffix}'", path)
