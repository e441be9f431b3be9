"""
Diagnosis Narrative Generator
=============================
Maps quantitative state to fixed qualitative text:

- severity level      -> diagnostic paragraph
- 30/90-day growth    -> trend narrative (accelerating / slow drift / stable)
- MA7 vs MA30         -> channel crossover note
- severity + readings -> per-channel assessment rows
"""
from typing import Dict, List, Optional, Sequence

from pdmonitor.config import DEFAULT_THRESHOLDS, NarrativeThresholds
from pdmonitor.errors import InsufficientDataError
from pdmonitor.models.device import Channel, Device, TimeSeriesPoint
from pdmonitor.models.severity import SeverityLevel, severity_display

TREND_ACCELERATING = (
    "The MA30 medium-term trend shows a clear rise, indicating that the insulation "
    "is degrading at an accelerating rate. Combine TEV and ultrasonic measurements "
    "for a localisation analysis immediately."
)
TREND_SLOW_DRIFT = (
    "The MA90 long-term trend is rising slowly. Short-term fluctuation is small, "
    "but the cumulative effect of insulation ageing needs attention. Shorten the "
    "inspection interval."
)
TREND_STABLE = (
    "All moving-average curves are flat and short-term fluctuation is within the "
    "normal range. No obvious insulation degradation trend was found."
)

CROSSOVER_RISING = (
    " The short-term average (MA7) is above the medium-term average (MA30), "
    "so the signal has been strengthening recently. Please keep watching."
)
CROSSOVER_FLAT = " The short-term average (MA7) is steady with no sudden increase."

# Channels flagged abnormal once a device reaches these levels
TEV_ABNORMAL_LEVELS = (SeverityLevel.DANGER, SeverityLevel.CRITICAL)

CHANNEL_NAMES = {
    Channel.UHF: "UHF Ultra-High Frequency",
    Channel.TEV: "TEV Transient Earth Voltage",
    Channel.HFCT: "HFCT High-Frequency Current",
    Channel.AE: "AE Acoustic Emission",
}


def diagnosis_text(level: SeverityLevel) -> str:
    """Fixed diagnostic paragraph for a severity level."""
    return severity_display(level).diagnosis


def trend_narrative(
    growth30: float,
    growth90: float,
    thresholds: Optional[NarrativeThresholds] = None,
) -> str:
    """
    30-day growth above the short-term threshold -> accelerating degradation,
    else 90-day growth above the long-term threshold -> slow drift,
    else stable. Thresholds are strict (a value equal to the threshold is not above it).
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    if growth30 > thresholds.short_term_threshold_pct:
        return TREND_ACCELERATING
    if growth90 > thresholds.long_term_threshold_pct:
        return TREND_SLOW_DRIFT
    return TREND_STABLE


def crossover_narrative(points: Sequence[TimeSeriesPoint], channel: Channel) -> str:
    """Describe a channel's 90-day view and where MA7 sits relative to MA30 today."""
    if not points:
        raise InsufficientDataError("Cannot describe an empty series.")
    last = points[-1]
    intro = (
        f"Showing the {len(points)}-day history of the {channel.value} channel. "
        "MA7 reflects short-term fluctuation, MA30 medium-term change and MA90 the long-term baseline."
    )
    return intro + (CROSSOVER_RISING if last.ma7 > last.ma30 else CROSSOVER_FLAT)


def channel_assessment(device: Device) -> List[Dict]:
    """
    Rows for the report's channel table. Readings are None for devices without
    data so the presentation layer can render a placeholder.
    """
    rows = []
    for channel in (Channel.UHF, Channel.TEV, Channel.HFCT):
        reading = device.reading(channel) if device.has_data else None
        abnormal = channel is Channel.TEV and device.status in TEV_ABNORMAL_LEVELS
        rows.append({
            "channel": channel.value,
            "name": CHANNEL_NAMES[channel],
            "amplitude": reading.amplitude if reading else None,
            "frequency": reading.frequency if reading else None,
            "assessment": "Abnormal" if abnormal else "Normal",
        })

    rows.append({
        "channel": "ENV",
        "name": "Ambient Temperature / Humidity",
        "temperature": device.temperature if device.has_data else None,
        "humidity": device.humidity if device.has_data else None,
        "assessment": "Suitable",
    })
    return rows
