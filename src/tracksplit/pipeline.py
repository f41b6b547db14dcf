import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from tracksplit.core.chunk import OutputChunk
from tracksplit.core.config import SplitConfig
from tracksplit.core.loader import TrackLoader
from tracksplit.core.point import TrackPoint
from tracksplit.io.readers import discover_track_files
from tracksplit.io.writer import GpxChunkWriter
from tracksplit.metrics import calculate_retention_ratio, summarize_chunks
from tracksplit.modules.filtering import QualityFilter
from tracksplit.modules.ordering import sort_points, verify_sorted
from tracksplit.modules.partition import DatePartitioner, SizePartitioner

logger = logging.getLogger(__name__)

ChunkWriter = Callable[[OutputChunk], Optional[Path]]


@dataclass
class SplitResult:
    """Outcome of one run. Empty chunk lists mean nothing was written."""
    loaded_count: int = 0
    kept_count: int = 0
    was_sorted: bool = True
    points: List[TrackPoint] = field(default_factory=list)
    date_chunks: List[OutputChunk] = field(default_factory=list)
    size_chunks: List[OutputChunk] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.points


class TrackSplitter:
    """
    Load -> verify -> sort -> filter, then partition the cleaned points by date
    and, independently, by size, handing every chunk to the writer.
    """

    def __init__(self, config: SplitConfig, writer: Optional[ChunkWriter] = None, loader: Optional[TrackLoader] = None):
        self.config = config
        self.writer = writer if writer is not None else GpxChunkWriter(config.dest_dir, config.extension)
        self.loader = loader if loader is not None else TrackLoader()

    def prepare(self, points: List[TrackPoint]) -> tuple[List[TrackPoint], bool]:
        """Orders and cleans a merged point list. Returns the points and the verifier result."""
        is_sorted = verify_sorted(points)
        if not is_sorted:
            if self.config.sort_unordered:
                points = sort_points(points)
            else:
                logger.warning(
                    "Input is not ordered and sorting is disabled; date chunks may repeat or interleave."
                )

        if self.config.filter_points:
            quality = QualityFilter(
                min_movement=self.config.min_movement,
                max_accuracy=self.config.max_accuracy,
                accuracy_required=self.config.filter_accuracy,
            )
            points = quality.filter(points)

        return points, is_sorted

    def _write_all(self, chunks: List[OutputChunk], result: SplitResult):
        for chunk in chunks:
            path = self.writer(chunk)
            if path is not None:
                result.written.append(Path(path))

    def run(self, paths: Optional[Iterable[str | Path]] = None) -> SplitResult:
        """
        Args:
            paths: Track files to read. Defaults to the files found in config.source_dir.
        """
        result = SplitResult()
        if paths is None:
            paths = discover_track_files(self.config.source_dir)
        paths = list(paths)
        if not paths:
            logger.info("No track files found. Nothing to do.")
            return result

        raw_points = self.loader.load(paths)
        result.loaded_count = len(raw_points)
        if not raw_points:
            logger.info("No points loaded. Nothing to do.")
            return result

        points, result.was_sorted = self.prepare(raw_points)
        result.points = points
        result.kept_count = len(points)
        if not points:
            logger.info("No points left after filtering. Nothing to do.")
            return result
        logger.debug("Retention ratio %.3f", calculate_retention_ratio(raw_points, points))

        date_partitioner = DatePartitioner(self.config.tz_offset_hours, self.config.prefix)
        result.date_chunks = date_partitioner.partition(points)
        self._write_all(result.date_chunks, result)

        size_partitioner = SizePartitioner(self.config.max_points, self.config.prefix)
        result.size_chunks = size_partitioner.partition(points)
        self._write_all(result.size_chunks, result)

        for label, chunks in (("date", result.date_chunks), ("size", result.size_chunks)):
            stats = summarize_chunks(chunks)
            logger.info(
                "Split by %s: %d files, %d points (smallest %d, largest %d)",
                label, stats['chunks'], stats['total_points'], stats['min_points'], stats['max_points'],
            )
        return result


def split_tracks(config: SplitConfig, paths: Optional[Iterable[str | Path]] = None) -> SplitResult:
    """Runs the whole pipeline with the default loader and GPX writer."""
    return TrackSplitter(config).run(paths)
