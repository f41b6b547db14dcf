from .point import TrackPoint
from .chunk import OutputChunk
from .config import SplitConfig
from .errors import TrackParseError, TrackSplitError
from .loader import TrackLoader, merge_point_lists, records_to_points, to_track_point
