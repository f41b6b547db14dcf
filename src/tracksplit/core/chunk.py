from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from .point import TrackPoint

@dataclass(frozen=True)
class OutputChunk:
    """
    A named, ordered run of points destined for one output file.
    `key` is either a calendar date (YYYY-MM-DD) or a zero-padded index.
    """
    key: str
    points: list[TrackPoint] = field(default_factory=list)
    prefix: Optional[str] = None

    @property
    def name(self) -> str:
        if self.prefix:
            return f"{self.prefix}-{self.key}"
        return self.key

    @property
    def start_time(self) -> datetime:
        if not self.points:
            raise ValueError("Chunk is empty")
        return self.points[0].timestamp

    @property
    def end_time(self) -> datetime:
        if not self.points:
            raise ValueError("Chunk is empty")
        return self.points[-1].timestamp

    def __len__(self) -> int:
        return len(self.points)
