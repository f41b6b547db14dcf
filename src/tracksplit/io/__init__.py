from .readers import CsvTrackReader, GpxTrackReader, discover_track_files, reader_for
from .writer import GpxChunkWriter, chunk_filename, chunk_to_gpx
