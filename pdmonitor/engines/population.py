"""
Population Filter/Sort Engine
=============================
Derives the ordered device list shown on the dashboard from three independent
predicates (text search, severity set, project scope) and a sort direction.

All functions are pure: they return new lists holding the caller's Device
objects and never mutate their inputs.
"""
import logging
from enum import Enum
from typing import Collection, Iterable, List, Optional, Sequence, Tuple

from pdmonitor.errors import InvalidProjectScope
from pdmonitor.models.device import Device, Project
from pdmonitor.models.severity import SeverityLevel, rank

logger = logging.getLogger(__name__)

ALL_PROJECTS = "all"
ALL_PROJECTS_LABEL = "All Projects"


class SortDirection(Enum):
    ASCENDING = "asc"     # No Data -> Critical
    DESCENDING = "desc"   # Critical -> No Data

    @classmethod
    def coerce(cls, value) -> "SortDirection":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("asc", "ascending"):
            return cls.ASCENDING
        if key in ("desc", "descending"):
            return cls.DESCENDING
        raise ValueError(f"Unknown sort direction: {value!r}")

    def toggled(self) -> "SortDirection":
        return SortDirection.ASCENDING if self is SortDirection.DESCENDING else SortDirection.DESCENDING


# =========================
# 1) Predicates
# =========================
def matches_search(device: Device, query: str) -> bool:
    """Case-insensitive substring match on device name OR station name."""
    if not query:
        return True
    needle = query.lower()
    return needle in device.name.lower() or needle in device.station.lower()


def matches_severity(device: Device, severities: Collection[SeverityLevel]) -> bool:
    """An empty severity set accepts every device."""
    return not severities or device.status in severities


def matches_project(device: Device, project_scope: str) -> bool:
    return project_scope == ALL_PROJECTS or device.project_id == project_scope


def validate_project_scope(project_scope: str, projects: Iterable[Project]) -> None:
    """Raise InvalidProjectScope when the scope names a project that is not supplied."""
    if project_scope == ALL_PROJECTS:
        return
    if project_scope not in {p.id for p in projects}:
        raise InvalidProjectScope(project_scope)


# =========================
# 2) Filter / sort
# =========================
def filter_devices(
    devices: Sequence[Device],
    query: str = "",
    severities: Collection = (),
    project_scope: str = ALL_PROJECTS,
    projects: Optional[Iterable[Project]] = None,
) -> List[Device]:
    """
    Devices passing search AND severity-set AND project-scope, in input order.

    When `projects` is given and `project_scope` is not one of them, the result
    is empty; an unknown scope is a transient state during population updates,
    not an error for the display surface.
    """
    if projects is not None:
        try:
            validate_project_scope(project_scope, projects)
        except InvalidProjectScope as e:
            logger.warning("%s; returning no devices", e)
            return []

    accepted = frozenset(SeverityLevel.coerce(s) for s in severities)
    return [
        d for d in devices
        if matches_search(d, query)
        and matches_severity(d, accepted)
        and matches_project(d, project_scope)
    ]


def sort_devices(devices: Sequence[Device], direction=SortDirection.DESCENDING) -> List[Device]:
    """
    Stable sort by severity rank. Equal severities keep their input order in
    both directions (the descending case negates the key instead of reversing).
    """
    direction = SortDirection.coerce(direction)
    sign = 1 if direction is SortDirection.ASCENDING else -1
    return sorted(devices, key=lambda d: sign * rank(d.status))


def filter_and_sort(
    devices: Sequence[Device],
    query: str = "",
    severities: Collection = (),
    project_scope: str = ALL_PROJECTS,
    direction=SortDirection.DESCENDING,
    projects: Optional[Iterable[Project]] = None,
) -> List[Device]:
    severities = tuple(severities)
    filtered = filter_devices(devices, query, severities, project_scope, projects)
    result = sort_devices(filtered, direction)
    logger.debug(
        "Population view: %d of %d devices (query=%r, severities=%d, scope=%s, %s)",
        len(result), len(devices), query, len(severities), project_scope,
        SortDirection.coerce(direction).value,
    )
    return result


def project_options(projects: Iterable[Project]) -> List[Tuple[str, str]]:
    """Choices for the project-scope selector, 'all' first."""
    return [(ALL_PROJECTS, ALL_PROJECTS_LABEL)] + [(p.id, p.name) for p in projects]
