"""
Severity Model
==============
Alarm levels for partial-discharge monitoring and their fixed total order.

Rank table (used for filtering and sorting, independent of display label):

    NO_DATA=0, NORMAL=1, WARNING=2, DANGER=3, CRITICAL=4

Display attributes live in one lookup table keyed by the enum so every level
is covered exactly once.
"""
from dataclasses import dataclass
from enum import Enum

from pdmonitor.errors import UnknownSeverityError


class SeverityLevel(Enum):
    """Alarm level of a monitored device"""
    NO_DATA = "no_data"
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"
    CRITICAL = "critical"

    @classmethod
    def coerce(cls, value) -> "SeverityLevel":
        """Accept a member, its name or its value; anything else is a programming error."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            try:
                return cls[key.upper()]
            except KeyError:
                pass
            try:
                return cls(key.lower())
            except ValueError:
                pass
        raise UnknownSeverityError(value)


SEVERITY_RANK = {
    SeverityLevel.NO_DATA: 0,
    SeverityLevel.NORMAL: 1,
    SeverityLevel.WARNING: 2,
    SeverityLevel.DANGER: 3,
    SeverityLevel.CRITICAL: 4,
}

# Order used by summary displays (legend, pie chart, filter chips)
DISPLAY_ORDER = (
    SeverityLevel.NORMAL,
    SeverityLevel.WARNING,
    SeverityLevel.DANGER,
    SeverityLevel.CRITICAL,
    SeverityLevel.NO_DATA,
)


@dataclass(frozen=True)
class SeverityDisplay:
    """Presentation attributes of one severity level"""
    label: str
    description: str
    color: str
    pulse: bool
    diagnosis: str


SEVERITY_TABLE = {
    SeverityLevel.NORMAL: SeverityDisplay(
        label="Normal",
        description="Insulation condition is good.",
        color="#22c55e",
        pulse=False,
        diagnosis=(
            "The device is operating in good condition. All monitored indicators "
            "(UHF, TEV, HFCT, AE) are within normal ranges and the ambient "
            "temperature and humidity are suitable. Continue routine periodic inspection."
        ),
    ),
    SeverityLevel.WARNING: SeverityDisplay(
        label="Level 1",
        description="Slight partial-discharge signal detected, no action required.",
        color="#eab308",
        pulse=False,
        diagnosis=(
            "Slight partial-discharge signatures have been detected. The danger "
            "threshold has not been reached, but the trend suggests minor insulation "
            "degradation. Shorten the inspection interval and watch the signal trend closely."
        ),
    ),
    SeverityLevel.DANGER: SeverityDisplay(
        label="Level 2",
        description="Partial-discharge signal keeps strengthening, plan corrective maintenance.",
        color="#f97316",
        pulse=True,
        diagnosis=(
            "Significant partial-discharge signals detected! TEV or UHF amplitude has "
            "exceeded the level 2 alarm threshold. This usually indicates an internal "
            "insulation defect or floating-potential discharge. Arrange an on-line "
            "re-test immediately and prepare a maintenance plan."
        ),
    ),
    SeverityLevel.CRITICAL: SeverityDisplay(
        label="Level 3",
        description="Partial-discharge signal is accelerating, schedule maintenance as soon as possible.",
        color="#ef4444",
        pulse=True,
        diagnosis=(
            "[SEVERE WARNING] Monitoring data indicates a very high risk of insulation "
            "failure. Several detection methods report anomalies with very strong signal "
            "levels and an insulation breakdown is imminent. De-energize and repair immediately!"
        ),
    ),
    SeverityLevel.NO_DATA: SeverityDisplay(
        label="No Data",
        description="No monitoring data received.",
        color="#94a3b8",
        pulse=False,
        diagnosis=(
            "The device is offline or data transmission is interrupted, so no valid "
            "diagnosis can be made. Check the sensor connections, power supply and "
            "network communication."
        ),
    ),
}

_missing = [level for level in SeverityLevel if level not in SEVERITY_TABLE or level not in SEVERITY_RANK]
if _missing:
    raise RuntimeError(f"Severity tables incomplete, missing: {_missing}")


def rank(level: SeverityLevel) -> int:
    """Integer rank of a severity level."""
    if not isinstance(level, SeverityLevel):
        raise UnknownSeverityError(level)
    return SEVERITY_RANK[level]


def severity_display(level: SeverityLevel) -> SeverityDisplay:
    if not isinstance(level, SeverityLevel):
        raise UnknownSeverityError(level)
    return SEVERITY_TABLE[level]
