"""
Device, project and time-series data models.
"""
import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from pdmonitor.config import GROWTH_FLAT_BAND_PCT, GROWTH_HIGHLIGHT_PCT, TREND_SAMPLE_LIMIT
from pdmonitor.models.severity import SeverityLevel

# Sentinel project ids meaning "not assigned to any project"
UNASSIGNED_PROJECT_IDS = ("", "none", "null")


class Channel(Enum):
    """Partial-discharge sensor channel"""
    UHF = "UHF"      # ultra-high frequency
    TEV = "TEV"      # transient earth voltage
    HFCT = "HFCT"    # high-frequency current transformer
    AE = "AE"        # acoustic emission


@dataclass(frozen=True)
class ChannelReading:
    """Latest reading of one channel"""
    amplitude: float    # dBmV
    frequency: float    # pulses per second


@dataclass(frozen=True)
class Project:
    id: str
    name: str


@dataclass(frozen=True)
class Device:
    """
    One monitored switchgear asset as supplied by the ingestion collaborator.
    The analytics core only reads it.
    """
    id: str
    name: str
    station: str
    status: SeverityLevel
    project_id: Optional[str] = None
    readings: Dict[Channel, ChannelReading] = field(default_factory=dict)
    temperature: Optional[float] = None     # °C
    humidity: Optional[float] = None        # %
    trend: Tuple[float, ...] = ()           # sparkline sample, oldest first
    last_updated: str = ""
    image: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "status", SeverityLevel.coerce(self.status))
        object.__setattr__(self, "name", self.name or "")
        object.__setattr__(self, "station", self.station or "")
        if len(self.trend) > TREND_SAMPLE_LIMIT:
            object.__setattr__(self, "trend", tuple(self.trend[-TREND_SAMPLE_LIMIT:]))
        else:
            object.__setattr__(self, "trend", tuple(self.trend))

    def __hash__(self):
        # readings is a dict, so the generated field hash would fail; ids are unique
        return hash(self.id)

    @property
    def has_data(self) -> bool:
        return self.status is not SeverityLevel.NO_DATA

    @property
    def last_updated_date(self) -> str:
        """Date part of the last-updated timestamp (first whitespace token)."""
        parts = self.last_updated.split()
        return parts[0] if parts else ""

    def reading(self, channel: Channel) -> Optional[ChannelReading]:
        return self.readings.get(channel)

    @classmethod
    def from_record(cls, record: Mapping) -> "Device":
        """
        Build a device from a flat dashboard record, e.g.

            {"id": "D1", "name": "GIS Bay 1", "station": "North", "status": "critical",
             "projectId": "P1", "uhf_amp": 42.0, "uhf_freq": 120, ..., "temp": 24.5,
             "humidity": 55, "trend": [{"v": 3.2}, ...], "lastUpdated": "2024-05-01 10:00"}
        """
        readings = {}
        for channel in Channel:
            prefix = channel.value.lower()
            amp = record.get(f"{prefix}_amp")
            freq = record.get(f"{prefix}_freq")
            if amp is None and freq is None:
                continue
            readings[channel] = ChannelReading(
                amplitude=float(amp or 0.0),
                frequency=float(freq or 0.0),
            )

        project_id = record.get("projectId", record.get("project_id"))
        if project_id is not None and str(project_id).strip().lower() in UNASSIGNED_PROJECT_IDS:
            project_id = None

        trend = []
        for sample in record.get("trend") or []:
            if isinstance(sample, Mapping):
                sample = sample.get("v", 0.0)
            trend.append(float(sample))

        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            station=record.get("station") or "",
            status=SeverityLevel.coerce(record.get("status", SeverityLevel.NO_DATA)),
            project_id=project_id,
            readings=readings,
            temperature=record.get("temp", record.get("temperature")),
            humidity=record.get("humidity"),
            trend=tuple(trend),
            last_updated=record.get("lastUpdated", record.get("last_updated", "")) or "",
            image=record.get("image"),
        )


@dataclass
class TimeSeriesPoint:
    """One daily sample; moving-average fields are filled by the MA engine."""
    date: datetime.date
    raw: float
    ma7: float = 0.0
    ma30: float = 0.0
    ma90: float = 0.0

    @property
    def label(self) -> str:
        return self.date.strftime("%m-%d")

    def to_dict(self) -> dict:
        return {
            "date": self.label,
            "fullDate": self.date.isoformat(),
            "raw": self.raw,
            "ma7": self.ma7,
            "ma30": self.ma30,
            "ma90": self.ma90,
        }


def classify_growth(growth: float) -> str:
    """'flat' inside the +/-2 % band, otherwise 'up' or 'down'."""
    if abs(growth) < GROWTH_FLAT_BAND_PCT:
        return "flat"
    return "up" if growth > 0 else "down"


def is_highlighted(growth: float) -> bool:
    return growth > GROWTH_HIGHLIGHT_PCT


@dataclass(frozen=True)
class TrendMetric:
    """Current value of one moving-average window and its growth over one window length."""
    value: float
    growth: float

    @property
    def growth_display(self) -> float:
        return round(self.growth, 1)

    @property
    def direction(self) -> str:
        return classify_growth(self.growth)

    @property
    def highlight(self) -> bool:
        return is_highlighted(self.growth)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "growth": self.growth_display,
            "direction": self.direction,
            "highlight": self.highlight,
        }
