"""Tests for chat rendering and station name handling."""

from ptv_departures.formatter import format_departure_times, format_station_list
from ptv_departures.models import DepartureMinutes, DeparturesResult, DepartureTimes
from ptv_departures.stations import get_stop_id, normalise_station_name


def test_format_success_marks_now_and_departed() -> None:
    result = DeparturesResult.success(
        DepartureTimes(
            to_city_departures=[DepartureMinutes(-1), DepartureMinutes(0)],
            from_city_departures=[DepartureMinutes(12)],
        )
    )

    assert format_departure_times("south_morang", result) == (
        "Next trains from South Morang\n"
        "Towards the city: departed, now\n"
        "Away from the city: 12 min"
    )


def test_format_failure_includes_status() -> None:
    result = DeparturesResult.failure(424, "error response received from ptv. code: 503")

    assert format_departure_times("rushall", result) == (
        "Couldn't get departures for Rushall (424): error response received from ptv. code: 503"
    )


def test_format_station_list_sorted() -> None:
    assert format_station_list(["regent", "bell"]) == "Known stations:\n- bell\n- regent"
    assert format_station_list([]) == "No stations match that search term."


def test_get_stop_id() -> None:
    assert get_stop_id("rushall") == 1170
    assert get_stop_id("southern cross") == 1181
    assert get_stop_id("Rushall") is None
    assert get_stop_id("nowhere") is None


def test_normalise_station_name() -> None:
    assert normalise_station_name("  Rushall ") == "rushall"
    assert normalise_station_name("Flinders  Street") == "flinders_street"
    assert normalise_station_name("southern_cross") == "southern cross"
    assert normalise_station_name("Jolimont-MCG") == "jolimont-mcg"
    assert normalise_station_name("Nowhere Town") == "nowhere town"
