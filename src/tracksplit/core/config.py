from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

DEFAULT_MAX_POINTS = 30000
DEFAULT_MAX_ACCURACY = 5.0
# Roughly 1.1 m of latitude.
DEFAULT_MIN_MOVEMENT = 0.00001


@dataclass(frozen=True)
class SplitConfig:
    """
    Immutable settings for one run. Built once and handed to every stage.

    Args:
        source_dir: Directory scanned for input track files.
        dest_dir: Directory the chunks are written to. Created if missing.
        max_points: Maximum number of points per size-partitioned chunk.
        tz_offset_hours: Hours added to UTC timestamps before taking the calendar day.
        max_accuracy: HDOP values must be strictly below this to pass the accuracy test.
        min_movement: Coordinate delta (decimal degrees) a point must exceed on
                      latitude or longitude to count as having moved.
        prefix: Optional string prepended to every output filename.
        filter_points: Run the quality filter at all.
        filter_accuracy: Apply the HDOP test inside the quality filter.
        sort_unordered: Sort when the input is not strictly ordered. Turning this off
                        leaves date partitioning without its sorted-input precondition.
        extension: Output file extension, without the dot.
    """
    source_dir: Path = Path("gpx")
    dest_dir: Path = Path("split")
    max_points: int = DEFAULT_MAX_POINTS
    tz_offset_hours: float = 0.0
    max_accuracy: float = DEFAULT_MAX_ACCURACY
    min_movement: float = DEFAULT_MIN_MOVEMENT
    prefix: Optional[str] = None
    filter_points: bool = True
    filter_accuracy: bool = False
    sort_unordered: bool = True
    extension: str = "gpx"

    def __post_init__(self):
        # frozen dataclass: coerce through object.__setattr__
        object.__setattr__(self, "source_dir", Path(self.source_dir))
        object.__setattr__(self, "dest_dir", Path(self.dest_dir))
        object.__setattr__(self, "extension", self.extension.lstrip("."))

        if self.max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {self.max_points}")
        if self.min_movement < 0:
            raise ValueError(f"min_movement must not be negative, got {self.min_movement}")
        if self.max_accuracy < 0:
            raise ValueError(f"max_accuracy must not be negative, got {self.max_accuracy}")
        if not self.extension:
            raise ValueError("extension must not be empty")

    @classmethod
    def from_args(cls, args) -> "SplitConfig":
        """
        Builds a config from an argparse namespace. Attributes that are missing
        or None fall back to the field defaults.
        """
        values = {}
        for f in fields(cls):
            value = getattr(args, f.name, None)
            if value is not None:
                values[f.name] = value
        return cls(**values)
