"""
Daily PD amplitude history for a device or one of its channels.

`history_from_values` is the normal path: it wraps ingested telemetry.
`synthesize_series` is a fallback for demos and for devices without stored
history. It is randomized on every call and must never be presented as
measured data.
"""
import datetime
import logging
from typing import List, Optional, Sequence

import numpy as np

from pdmonitor.config import (
    CHANNEL_PROFILES,
    CHANNEL_SEVERITY_OFFSETS,
    CRITICAL_QUADRATIC_DIVISOR,
    DEFAULT_HISTORY_DAYS,
    DEVICE_PROFILES,
    SPIKE_MAX_AMPLITUDE,
    SPIKE_PROBABILITY,
)
from pdmonitor.errors import InsufficientDataError
from pdmonitor.models.device import Channel, TimeSeriesPoint
from pdmonitor.models.severity import SeverityLevel
from pdmonitor.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


def _dates_ending(end: Optional[datetime.date], days: int) -> List[datetime.date]:
    end = end or datetime.date.today()
    return [end - datetime.timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def _profile(status: SeverityLevel, channel: Optional[Channel]):
    """(baseline, volatility, trend_factor, spikes) for the requested mode."""
    if channel is None:
        p = DEVICE_PROFILES[status.name]
        return p["baseline"], p["volatility"], p["trend"], False

    c = CHANNEL_PROFILES[channel.value]
    offset = CHANNEL_SEVERITY_OFFSETS[status.name]
    return c["baseline"] + offset["baseline"], c["volatility"], offset["trend"], True


def synthesize_series(
    status: SeverityLevel,
    channel: Optional[Channel] = None,
    days: int = DEFAULT_HISTORY_DAYS,
    end: Optional[datetime.date] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[TimeSeriesPoint]:
    """
    Generate `days` daily points ending at `end` (today by default), oldest first.

    raw(x) = baseline + U(-vol/2, vol/2) + trend * x        for x = 1..days
    CRITICAL adds x^2 / 250. Channel mode adds a 10 % chance of an upward
    spike U(0, 10) per point. Values are clamped to >= 0 and rounded half-up to 0.1.

    Moving-average fields are left at 0.0.
    """
    status = SeverityLevel.coerce(status)
    if days < 1:
        raise InsufficientDataError(f"Cannot synthesize a series of {days} days")
    rng = rng if rng is not None else np.random.default_rng()

    baseline, volatility, trend, spikes = _profile(status, channel)

    x = np.arange(1, days + 1, dtype=float)
    raw = baseline + (rng.random(days) - 0.5) * volatility + trend * x

    if status is SeverityLevel.CRITICAL:
        raw += (x * x) / CRITICAL_QUADRATIC_DIVISOR

    if spikes:
        spike_mask = rng.random(days) < SPIKE_PROBABILITY
        raw += spike_mask * rng.random(days) * SPIKE_MAX_AMPLITUDE

    raw = round_half_up(np.clip(raw, 0.0, None))

    logger.warning(
        "Synthesized %d-day fallback series (status=%s, channel=%s); not measured data",
        days, status.name, channel.value if channel else "device",
    )
    return [
        TimeSeriesPoint(date=d, raw=float(v))
        for d, v in zip(_dates_ending(end, days), raw)
    ]


def history_from_values(
    values: Sequence[float],
    end: Optional[datetime.date] = None,
) -> List[TimeSeriesPoint]:
    """Wrap an ingested daily series (oldest first) as TimeSeriesPoints ending at `end`."""
    if values is None or len(values) == 0:
        raise InsufficientDataError("History is empty, at least one point is required.")
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InsufficientDataError(f"History contains non-numeric values: {e}") from e
    if np.isnan(arr).any():
        raise InsufficientDataError("History contains missing values.")

    arr = round_half_up(np.clip(arr, 0.0, None))
    return [
        TimeSeriesPoint(date=d, raw=float(v))
        for d, v in zip(_dates_ending(end, len(arr)), arr)
    ]
