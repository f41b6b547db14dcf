from .core import OutputChunk, SplitConfig, TrackParseError, TrackPoint, TrackSplitError
from .pipeline import SplitResult, TrackSplitter, split_tracks

__version__ = "0.1.0"
