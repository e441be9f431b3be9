from dataclasses import dataclass
from typing import Mapping, Optional

# ==========================================
# MOVING AVERAGE WINDOWS
# ==========================================
MA_WINDOWS = (7, 30, 90)        # short / medium / long term
DEFAULT_HISTORY_DAYS = 90

# Growth display bands (percent)
GROWTH_FLAT_BAND_PCT = 2.0      # |growth| below this renders as flat
GROWTH_HIGHLIGHT_PCT = 5.0      # growth above this turns the metric bar red

# Sparkline sample carried on each device
TREND_SAMPLE_LIMIT = 20

# ==========================================
# SERIES SYNTHESIS PROFILES (fallback data only)
# ==========================================

# Device mode: per-severity baseline amplitude, volatility and linear slope.
# Keyed by severity name so this table has no import-time dependency on models.
DEVICE_PROFILES = {
    "NO_DATA":  {"baseline": 15.0, "volatility": 5.0,  "trend": 0.0},
    "NORMAL":   {"baseline": 15.0, "volatility": 5.0,  "trend": 0.0},
    "WARNING":  {"baseline": 25.0, "volatility": 6.0,  "trend": 0.05},
    "DANGER":   {"baseline": 35.0, "volatility": 8.0,  "trend": 0.15},
    "CRITICAL": {"baseline": 45.0, "volatility": 12.0, "trend": 0.4},
}

# Channel mode: channel constants ...
CHANNEL_PROFILES = {
    "UHF":  {"baseline": 20.0, "volatility": 8.0},
    "TEV":  {"baseline": 25.0, "volatility": 6.0},
    "HFCT": {"baseline": 10.0, "volatility": 3.0},
    "AE":   {"baseline": 5.0,  "volatility": 2.0},
}

# ... shifted by severity
CHANNEL_SEVERITY_OFFSETS = {
    "NO_DATA":  {"baseline": 0.0,  "trend": 0.0},
    "NORMAL":   {"baseline": 0.0,  "trend": 0.0},
    "WARNING":  {"baseline": 10.0, "trend": 0.05},
    "DANGER":   {"baseline": 20.0, "trend": 0.1},
    "CRITICAL": {"baseline": 30.0, "trend": 0.3},
}

CRITICAL_QUADRATIC_DIVISOR = 250.0   # x^2 / 250, dominates only in the last weeks
SPIKE_PROBABILITY = 0.10
SPIKE_MAX_AMPLITUDE = 10.0


# ==========================================
# NARRATIVE THRESHOLDS
# ==========================================

@dataclass(frozen=True)
class NarrativeThresholds:
    """Policy thresholds for the trend narrative, overridable by the host."""
    short_term_threshold_pct: float = 10.0
    long_term_threshold_pct: float = 5.0

    @classmethod
    def from_mapping(cls, options: Optional[Mapping] = None) -> "NarrativeThresholds":
        """
        Build from host options. Accepts both the snake_case field names and
        the camelCase keys used by the dashboard (`shortTermThresholdPct`,
        `longTermThresholdPct`). Missing keys keep their defaults.
        """
        if not options:
            return cls()
        defaults = cls()
        short_term = options.get(
            "shortTermThresholdPct",
            options.get("short_term_threshold_pct", defaults.short_term_threshold_pct),
        )
        long_term = options.get(
            "longTermThresholdPct",
            options.get("long_term_threshold_pct", defaults.long_term_threshold_pct),
        )
        return cls(float(short_term), float(long_term))


DEFAULT_THRESHOLDS = NarrativeThresholds()
