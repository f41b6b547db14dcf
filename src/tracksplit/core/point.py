from dataclasses import dataclass
from datetime import datetime

@dataclass(frozen=True)
class TrackPoint:
    """
    Represents a single GPS sample (lat, lon, t) with optional elevation and HDOP.
    frozen=True keeps points immutable while they move through the pipeline.
    Absent optional values are None, never 0.
    The timestamp must be timezone-aware so that any two points compare.
    """
    lat: float
    lon: float
    timestamp: datetime
    elevation: float | None = None
    hdop: float | None = None

    def __post_init__(self):
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise ValueError(f"timestamp must be timezone-aware, got {self.timestamp!r}")

    @property
    def has_hdop(self) -> bool:
        return self.hdop is not None
