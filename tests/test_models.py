"""
Unit tests for severity model and device records
"""
import sys
import os
import datetime
import pytest

# Add the project root to the path so we can import modules
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pdmonitor.errors import UnknownSeverityError
from pdmonitor.models.device import (
    Channel,
    ChannelReading,
    Device,
    TimeSeriesPoint,
    TrendMetric,
    classify_growth,
    is_highlighted,
)
from pdmonitor.models.severity import SEVERITY_TABLE, SeverityLevel, rank, severity_display


class TestSeverity:
    """Severity rank and display table"""

    def test_rank_table(self):
        assert [rank(level) for level in (
            SeverityLevel.NO_DATA,
            SeverityLevel.NORMAL,
            SeverityLevel.WARNING,
            SeverityLevel.DANGER,
            SeverityLevel.CRITICAL,
        )] == [0, 1, 2, 3, 4]

    def test_table_covers_every_level(self):
        assert set(SEVERITY_TABLE) == set(SeverityLevel)

    def test_display_entries(self):
        critical = severity_display(SeverityLevel.CRITICAL)
        assert critical.label == "Level 3"
        assert critical.color == "#ef4444"
        assert critical.pulse is True
        assert severity_display(SeverityLevel.NORMAL).pulse is False
        assert severity_display(SeverityLevel.NO_DATA).label == "No Data"

    def test_rank_rejects_non_members(self):
        with pytest.raises(UnknownSeverityError):
            rank("critical")
        with pytest.raises(KeyError):
            rank(4)

    def test_coerce(self):
        assert SeverityLevel.coerce("critical") is SeverityLevel.CRITICAL
        assert SeverityLevel.coerce("NO_DATA") is SeverityLevel.NO_DATA
        assert SeverityLevel.coerce(" Warning ") is SeverityLevel.WARNING
        assert SeverityLevel.coerce(SeverityLevel.DANGER) is SeverityLevel.DANGER
        with pytest.raises(UnknownSeverityError) as excinfo:
            SeverityLevel.coerce("severe")
        assert "severe" in str(excinfo.value)


class TestDevice:
    """Device construction from dashboard records"""

    def test_from_record(self):
        record = {
            "id": 17,
            "name": "GIS Bay 17",
            "station": "North 500kV",
            "status": "danger",
            "projectId": "P1",
            "uhf_amp": 42.5, "uhf_freq": 120,
            "tev_amp": 31.0, "tev_freq": 80,
            "temp": 24.5,
            "humidity": 61,
            "trend": [{"v": 1.0}, {"v": 2.5}, 3],
            "lastUpdated": "2024-05-01 10:32:00",
            "image": "data:image/png;base64,AAAA",
        }
        device = Device.from_record(record)
        assert device.id == "17"
        assert device.status is SeverityLevel.DANGER
        assert device.reading(Channel.UHF) == ChannelReading(42.5, 120.0)
        assert device.reading(Channel.AE) is None
        assert device.trend == (1.0, 2.5, 3.0)
        assert device.last_updated_date == "2024-05-01"
        assert device.has_data

    def test_none_project_sentinel(self):
        device = Device.from_record({"id": "x", "status": "normal", "projectId": "none"})
        assert device.project_id is None

    def test_missing_status_means_no_data(self):
        device = Device.from_record({"id": "x"})
        assert device.status is SeverityLevel.NO_DATA
        assert not device.has_data
        assert device.last_updated_date == ""

    def test_bad_status_raises(self):
        with pytest.raises(UnknownSeverityError):
            Device.from_record({"id": "x", "status": "on fire"})

    def test_trend_sample_is_bounded(self):
        device = Device(id="x", name="n", station="s", status=SeverityLevel.NORMAL, trend=tuple(range(50)))
        assert len(device.trend) == 20
        assert device.trend[-1] == 49

    def test_null_name_and_station_become_empty(self):
        device = Device.from_record({"id": "x", "status": "normal", "name": None, "station": None})
        assert device.name == ""
        assert device.station == ""

    def test_devices_are_hashable(self):
        record = {"id": "D1", "name": "GIS Bay 1", "status": "warning", "uhf_amp": 12.0}
        first, second = Device.from_record(record), Device.from_record(record)
        assert first == second
        assert len({first, second}) == 1
        selected = {first: "open"}
        assert selected[second] == "open"


def test_time_series_point_dict():
    point = TimeSeriesPoint(date=datetime.date(2024, 3, 9), raw=12.3, ma7=11.0)
    assert point.to_dict() == {
        "date": "03-09",
        "fullDate": "2024-03-09",
        "raw": 12.3,
        "ma7": 11.0,
        "ma30": 0.0,
        "ma90": 0.0,
    }


def test_trend_metric_dict():
    metric = TrendMetric(value=11.4, growth=14.000000000000002)
    assert metric.to_dict() == {"value": 11.4, "growth": 14.0, "direction": "up", "highlight": True}
    assert TrendMetric(10.0, -1.5).direction == "flat"


def test_growth_banding():
    assert classify_growth(1.9) == "flat"
    assert classify_growth(-1.9) == "flat"
    assert classify_growth(2.0) == "up"
    assert classify_growth(-2.0) == "down"
    assert is_highlighted(5.1)
    assert not is_highlighted(5.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
