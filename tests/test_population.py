"""
Unit tests for the device population filter/sort engine
"""
import sys
import os
import pytest

# Add the project root to the path so we can import modules
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pdmonitor.engines.population import (
    SortDirection,
    filter_and_sort,
    filter_devices,
    project_options,
    sort_devices,
    validate_project_scope,
)
from pdmonitor.errors import InvalidProjectScope
from pdmonitor.models.device import Device, Project
from pdmonitor.models.severity import SeverityLevel as S

PROJECTS = [Project("P1", "East Substation Upgrade"), Project("P2", "West GIS Retrofit")]


def make_device(dev_id, status, name=None, station="North Station", project_id="P1"):
    return Device(
        id=dev_id,
        name=name or f"GIS Bay {dev_id}",
        station=station,
        status=status,
        project_id=project_id,
    )


@pytest.fixture
def population():
    return [
        make_device("a", S.WARNING, station="North Station"),
        make_device("b", S.CRITICAL, station="South Station", project_id="P2"),
        make_device("c", S.WARNING, name="Cable Joint 3", station="South Station"),
        make_device("d", S.CRITICAL, project_id=None),
        make_device("e", S.NO_DATA, station="East Yard"),
        make_device("f", S.NORMAL, project_id="P2"),
    ]


def test_scenario_a_severity_filter_descending():
    crit = make_device("crit", S.CRITICAL)
    norm = make_device("norm", S.NORMAL)
    warn = make_device("warn", S.WARNING)
    result = filter_and_sort(
        [crit, norm, warn],
        severities={S.CRITICAL, S.WARNING},
        direction=SortDirection.DESCENDING,
    )
    assert result == [crit, warn]
    assert result[0] is crit and result[1] is warn


def test_scenario_c_unknown_project_scope_yields_empty(population):
    result = filter_and_sort(population, project_scope="P404", projects=PROJECTS)
    assert result == []


def test_unknown_scope_without_project_list_matches_nothing(population):
    assert filter_devices(population, project_scope="P404") == []


def test_validate_project_scope_raises_for_hosts():
    validate_project_scope("all", PROJECTS)
    validate_project_scope("P1", PROJECTS)
    with pytest.raises(InvalidProjectScope):
        validate_project_scope("P404", PROJECTS)


def test_empty_severity_set_accepts_all(population):
    assert filter_devices(population, severities=set()) == population
    assert filter_devices(population, severities=[]) == population


def test_search_matches_name_or_station_case_insensitive(population):
    by_station = filter_devices(population, query="south")
    assert [d.id for d in by_station] == ["b", "c"]

    by_name = filter_devices(population, query="CABLE joint")
    assert [d.id for d in by_name] == ["c"]

    assert filter_devices(population, query="") == population
    assert filter_devices(population, query="zzz") == []


def test_project_scope(population):
    assert [d.id for d in filter_devices(population, project_scope="P2", projects=PROJECTS)] == ["b", "f"]
    assert filter_devices(population, project_scope="all", projects=PROJECTS) == population


def test_predicates_combine_with_and(population):
    result = filter_devices(
        population,
        query="south",
        severities={S.WARNING},
        project_scope="P1",
        projects=PROJECTS,
    )
    assert [d.id for d in result] == ["c"]


def test_severity_names_are_accepted(population):
    result = filter_devices(population, severities=["critical", "NO_DATA"])
    assert [d.id for d in result] == ["b", "d", "e"]


def test_sort_is_stable_in_both_directions(population):
    desc = sort_devices(population, SortDirection.DESCENDING)
    assert [d.id for d in desc] == ["b", "d", "a", "c", "f", "e"]

    asc = sort_devices(population, SortDirection.ASCENDING)
    assert [d.id for d in asc] == ["e", "f", "a", "c", "b", "d"]


def test_severities_may_be_a_generator(population):
    wanted = (s for s in ("critical", "warning"))
    result = filter_and_sort(population, severities=wanted)
    assert [d.id for d in result] == ["b", "d", "a", "c"]


def test_search_tolerates_records_without_names(population):
    unnamed = Device.from_record({"id": "z", "status": "danger", "name": None, "station": None})
    result = filter_devices(population + [unnamed], query="bay")
    assert unnamed not in result
    assert filter_devices([unnamed], query="") == [unnamed]


def test_sort_direction_strings():
    assert SortDirection.coerce("asc") is SortDirection.ASCENDING
    assert SortDirection.coerce("DESC") is SortDirection.DESCENDING
    assert SortDirection.DESCENDING.toggled() is SortDirection.ASCENDING
    with pytest.raises(ValueError):
        SortDirection.coerce("sideways")


def test_idempotent_and_inputs_untouched(population):
    snapshot = list(population)
    first = filter_and_sort(population, query="station", direction="desc")
    second = filter_and_sort(population, query="station", direction="desc")
    assert first == second
    assert len(first) == len(second)
    assert all(x is y for x, y in zip(first, second))
    assert population == snapshot


def test_empty_population():
    assert filter_and_sort([]) == []


def test_project_options():
    assert project_options(PROJECTS) == [
        ("all", "All Projects"),
        ("P1", "East Substation Upgrade"),
        ("P2", "West GIS Retrofit"),
    ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
