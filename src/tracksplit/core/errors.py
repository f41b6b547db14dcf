from pathlib import Path
from typing import Optional


class TrackSplitError(Exception):
    """Base class for errors raised by tracksplit."""


class TrackParseError(TrackSplitError, ValueError):
    """
    Raised when a track file, or a single record inside it, cannot be turned
    into points. Fatal for that file's contribution only.
    """

    def __init__(self, message: str, source: Optional[str | Path] = None, index: Optional[int] = None):
        self.source = str(source) if source is not None else None
        self.index = index
        location = ""
        if self.source is not None:
            location = self.source
            if index is not None:
                location += f" (point {index})"
            location += ": "
        super().__init__(f"{location}{message}")
