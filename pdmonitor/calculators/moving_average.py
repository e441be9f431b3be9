import logging
from typing import Dict, Iterable, List, Sequence, Union

import numpy as np
import pandas as pd

from pdmonitor.config import MA_WINDOWS
from pdmonitor.errors import InsufficientDataError
from pdmonitor.models.device import TimeSeriesPoint, TrendMetric
from pdmonitor.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

SeriesLike = Union[Sequence[float], np.ndarray, pd.Series, Sequence[TimeSeriesPoint]]

# =========================
# 1) Helpers
# =========================
def _as_series(values: SeriesLike) -> pd.Series:
    """Numeric pandas Series from raw values or TimeSeriesPoints."""
    if values is None or len(values) == 0:
        raise InsufficientDataError("Series is empty, at least one point is required.")

    if isinstance(values, pd.Series):
        raw = values.reset_index(drop=True)
    else:
        items = list(values)
        if isinstance(items[0], TimeSeriesPoint):
            items = [p.raw for p in items]
        raw = pd.Series(items)

    numeric = pd.to_numeric(raw, errors="coerce")
    if numeric.isna().any():
        bad = int(numeric.isna().sum())
        raise InsufficientDataError(f"Series contains {bad} non-numeric or missing value(s).")
    return numeric.astype(float)


def points_to_frame(points: Sequence[TimeSeriesPoint]) -> pd.DataFrame:
    """Tabular view of a point sequence (one row per day)."""
    if not points:
        raise InsufficientDataError("Series is empty, at least one point is required.")
    return pd.DataFrame({
        "date": [p.date for p in points],
        "raw": [p.raw for p in points],
    })


# =========================
# 2) Moving averages
# =========================
def moving_average(values: SeriesLike, window: int) -> List[float]:
    """
    Causal trailing mean at every index.

    At index i the window is the slice ending at i of length min(i + 1, window),
    so the start of the series carries partial averages instead of gaps.
    Rounded to one decimal, ties up.
    """
    if window < 1:
        raise ValueError(f"Window must be a positive integer, got {window}")
    s = _as_series(values)
    ma = round_half_up(s.rolling(window=window, min_periods=1).mean())
    return [float(v) for v in ma]


def apply_moving_averages(points: List[TimeSeriesPoint]) -> List[TimeSeriesPoint]:
    """Fill ma7 / ma30 / ma90 on each point in place and return the same list."""
    frame = points_to_frame(points)
    frame["raw"] = _as_series(frame["raw"])
    for window in MA_WINDOWS:
        frame[f"ma{window}"] = round_half_up(
            frame["raw"].rolling(window=window, min_periods=1).mean()
        )

    for point, row in zip(points, frame.itertuples(index=False)):
        point.ma7 = float(row.ma7)
        point.ma30 = float(row.ma30)
        point.ma90 = float(row.ma90)

    logger.debug("Computed moving averages over %d points", len(points))
    return points


# =========================
# 3) Growth
# =========================
def calculate_growth(current: float, reference: float) -> float:
    """Percentage change of current versus reference; 0.0 when reference is 0."""
    if reference == 0:
        return 0.0
    return (current - reference) / reference * 100.0


def compute_trend_metrics(values: SeriesLike, windows: Iterable[int] = MA_WINDOWS) -> Dict[int, TrendMetric]:
    """
    Current moving average of each window and its growth versus the value of the
    same window one window-length earlier (index clamped to 0).

    Example (W=7): [10, 10, 10, 10, 10, 10, 10, 20] -> MA7 = 11.4, reference
    MA7 at index 0 = 10.0, growth = +14.0 %.
    """
    s = _as_series(values)
    last = len(s) - 1

    metrics = {}
    for window in windows:
        ma = moving_average(s, window)
        current = ma[last]
        reference = ma[max(0, last - window)]
        metrics[window] = TrendMetric(value=current, growth=calculate_growth(current, reference))
    return metrics
