import logging
from pathlib import Path
from typing import Optional

import gpxpy.gpx

from tracksplit.core.chunk import OutputChunk

logger = logging.getLogger(__name__)

CREATOR = "tracksplit"


def chunk_filename(key: str, prefix: Optional[str] = None, extension: str = "gpx") -> str:
    """Builds `{prefix-}{key}.{ext}`."""
    stem = f"{prefix}-{key}" if prefix else key
    return f"{stem}.{extension.lstrip('.')}"


def chunk_to_gpx(chunk: OutputChunk) -> gpxpy.gpx.GPX:
    """
    One track named after the chunk, one segment holding its points.
    Elevation and HDOP are left out when absent.
    """
    gpx = gpxpy.gpx.GPX()
    gpx.creator = CREATOR

    track = gpxpy.gpx.GPXTrack(name=chunk.name)
    segment = gpxpy.gpx.GPXTrackSegment()
    for p in chunk.points:
        segment.points.append(gpxpy.gpx.GPXTrackPoint(
            latitude=p.lat,
            longitude=p.lon,
            elevation=p.elevation,
            time=p.timestamp,
            horizontal_dilution=p.hdop,
        ))
    track.segments.append(segment)
    gpx.tracks.append(track)
    return gpx


class GpxChunkWriter:
    """
    Writes each chunk as a GPX 1.1 file under dest_dir.
    The directory is created on first write. OSError is left to the caller.
    """

    def __init__(self, dest_dir: str | Path, extension: str = "gpx"):
        self.dest_dir = Path(dest_dir)
        self.extension = extension

    def path_for(self, chunk: OutputChunk) -> Path:
        return self.dest_dir / chunk_filename(chunk.key, chunk.prefix, self.extension)

    def __call__(self, chunk: OutputChunk) -> Path:
        self.dest_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(chunk)
        logger.info(
            " Saving %d points (%s to %s) to %s",
            len(chunk), chunk.start_time.isoformat(), chunk.end_time.isoformat(), path,
        )
        with open(path, "w", encoding="utf-8") as f:
            f.write(chunk_to_gpx(chunk).to_xml(version="1.1"))
        return path
