import logging
import pytest
from datetime import datetime, timezone

import gpxpy

from tracksplit.core.chunk import OutputChunk
from tracksplit.core.errors import TrackParseError
from tracksplit.core.loader import records_to_points
from tracksplit.core.point import TrackPoint
from tracksplit.io import (
    CsvTrackReader,
    GpxChunkWriter,
    GpxTrackReader,
    chunk_filename,
    discover_track_files,
    reader_for,
)


def test_discover_sorted_and_filtered(tmp_path):
    for name in ["b.gpx", "a.GPX", "c.csv", "readme.txt"]:
        (tmp_path / name).write_text("")
    (tmp_path / "sub.gpx").mkdir()

    files = discover_track_files(tmp_path)
    assert [f.name for f in files] == ["a.GPX", "b.gpx", "c.csv"]


def test_discover_missing_dir(tmp_path):
    assert discover_track_files(tmp_path / "nope") == []


def test_gpx_reader_records(write_gpx):
    path = write_gpx("t.gpx", [
        (10.5, 20.25, "2024-05-01T10:00:00Z", 100.0, 1.5),
        (10.6, 20.35, "2024-05-01T10:00:01Z", None, None),
    ])
    records = list(GpxTrackReader(path).records())
    assert len(records) == 2
    assert records[0]["lat"] == 10.5
    assert records[0]["ele"] == 100.0
    assert records[0]["hdop"] == 1.5
    assert records[1]["ele"] is None
    assert records[1]["hdop"] is None

    points = records_to_points(records, source=path)
    assert points[1].timestamp == datetime(2024, 5, 1, 10, 0, 1, tzinfo=timezone.utc)


def test_gpx_reader_bad_xml(tmp_path):
    p = tmp_path / "bad.gpx"
    p.write_text("not xml at all <", encoding="utf-8")
    with pytest.raises(TrackParseError, match="bad.gpx"):
        list(GpxTrackReader(p).records())


def test_csv_reader(tmp_path):
    p = tmp_path / "t.csv"
    p.write_text(
        "time,lat,lon,ele,hdop\n"
        "2024-05-01T10:00:00Z,1.50,2.0,,0.8\n"
        "2024-05-01T10:00:05Z,1.6,2.1,3,\n"
    )
    points = records_to_points(CsvTrackReader(p).records(), source=p)
    assert [pt.lat for pt in points] == [1.5, 1.6]
    assert points[0].elevation is None and points[0].hdop == 0.8
    assert points[1].elevation == 3.0 and points[1].hdop is None


def test_csv_reader_column_mapping(tmp_path):
    p = tmp_path / "t.csv"
    p.write_text("latitude;longitude;timestamp\n1;2;2024-05-01 10:00:00\n")
    reader = CsvTrackReader(p, sep=";", col_mapping={"lat": "latitude", "lon": "longitude", "time": "timestamp"})
    points = records_to_points(reader.records())
    assert points[0].lon == 2.0
    assert points[0].elevation is None


def test_csv_reader_missing_columns(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_text("lat,lon\n10,20")
    with pytest.raises(TrackParseError, match="missing required columns"):
        list(CsvTrackReader(p).records())


def test_reader_for_dispatch(tmp_path):
    assert isinstance(reader_for(tmp_path / "a.gpx"), GpxTrackReader)
    assert isinstance(reader_for(tmp_path / "a.CSV"), CsvTrackReader)
    with pytest.raises(TrackParseError, match="unsupported"):
        reader_for(tmp_path / "a.kml")


def test_chunk_filename():
    assert chunk_filename("2024-05-01") == "2024-05-01.gpx"
    assert chunk_filename("01", prefix="africa") == "africa-01.gpx"
    assert chunk_filename("01", prefix="", extension=".xml") == "01.xml"


def test_writer_round_trip(tmp_path):
    t0 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    t1 = datetime(2024, 5, 1, 10, 0, 5, tzinfo=timezone.utc)
    points = [
        TrackPoint(lat=1.25, lon=-2.5, timestamp=t0, elevation=0.0, hdop=0.7),
        TrackPoint(lat=1.5, lon=-2.75, timestamp=t1),
    ]
    dest = tmp_path / "out" / "nested"
    writer = GpxChunkWriter(dest)
    path = writer(OutputChunk(key="01", points=points, prefix="trip"))

    assert path == dest / "trip-01.gpx"
    with open(path, encoding="utf-8") as f:
        gpx = gpxpy.parse(f)

    assert gpx.tracks[0].name == "trip-01"
    read = gpx.tracks[0].segments[0].points
    assert [(p.latitude, p.longitude) for p in read] == [(1.25, -2.5), (1.5, -2.75)]
    assert read[0].elevation == 0.0
    assert read[0].horizontal_dilution == 0.7
    assert read[0].time == t0
    assert read[1].elevation is None
    assert read[1].horizontal_dilution is None

    text = path.read_text(encoding="utf-8")
    assert text.count("<ele>") == 1
    assert text.count("<hdop>") == 1


def test_writer_logs_time_range(tmp_path, caplog):
    t0 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    t1 = datetime(2024, 5, 1, 11, 30, tzinfo=timezone.utc)
    chunk = OutputChunk(key="2024-05-01", points=[
        TrackPoint(lat=1.0, lon=2.0, timestamp=t0),
        TrackPoint(lat=1.5, lon=2.5, timestamp=t1),
    ])
    with caplog.at_level(logging.INFO, logger="tracksplit.io.writer"):
        GpxChunkWriter(tmp_path)(chunk)

    assert "Saving 2 points (2024-05-01T10:00:00+00:00 to 2024-05-01T11:30:00+00:00)" in caplog.text
