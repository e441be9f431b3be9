from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from pdmonitor.models.device import Device
from pdmonitor.models.severity import DISPLAY_ORDER, SeverityLevel, severity_display


@dataclass(frozen=True)
class StationTally:
    """Device count per severity level over one population."""
    counts: Dict[SeverityLevel, int]
    total: int

    def __getitem__(self, level: SeverityLevel) -> int:
        return self.counts[level]

    def to_dict(self) -> dict:
        out = {level.name: self.counts[level] for level in DISPLAY_ORDER}
        out["total"] = self.total
        return out


def tally_devices(devices: Iterable[Device]) -> StationTally:
    """Zero-filled count for all five levels plus the total. Recomputed from scratch."""
    counts = {level: 0 for level in SeverityLevel}
    total = 0
    for device in devices:
        counts[device.status] += 1
        total += 1
    return StationTally(counts=counts, total=total)


def tally_chart_slices(tally: StationTally) -> List[Tuple[str, int, str]]:
    """(label, count, color) for each non-empty level, in legend order."""
    slices = []
    for level in DISPLAY_ORDER:
        count = tally.counts[level]
        if count > 0:
            display = severity_display(level)
            slices.append((display.label, count, display.color))
    return slices
