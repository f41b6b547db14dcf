import pytest

GPX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="test">
  <trk>
    <name>test</name>
    <trkseg>
{points}
    </trkseg>
  </trk>
</gpx>
"""


def gpx_text(points):
    """points: iterable of (lat, lon, time, ele, hdop); ele/hdop may be None."""
    lines = []
    for lat, lon, time, ele, hdop in points:
        lines.append(f'      <trkpt lat="{lat}" lon="{lon}">')
        if ele is not None:
            lines.append(f"        <ele>{ele}</ele>")
        lines.append(f"        <time>{time}</time>")
        if hdop is not None:
            lines.append(f"        <hdop>{hdop}</hdop>")
        lines.append("      </trkpt>")
    return GPX_TEMPLATE.format(points="\n".join(lines))


@pytest.fixture
def write_gpx(tmp_path):
    def _write(name, points, directory=None):
        d = directory or tmp_path / "gpx"
        d.mkdir(parents=True, exist_ok=True)
        p = d / name
        p.write_text(gpx_text(points), encoding="utf-8")
        return p
    return _write
