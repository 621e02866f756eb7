import pytest

from flightmint.client import ErrorMessage, SearchPhase, TrackerState
from flightmint.errors import StateTransitionError
from flightmint.models import FlightMatch, FlightRecord


def flight(callsign, altitude=1000.0):
    return FlightMatch.from_record(FlightRecord(icao24="abc123", callsign=callsign, altitude=altitude))


def loaded(*callsigns):
    state = TrackerState().begin_search("HA")
    return state.succeed(state.sequence, [flight(c) for c in callsigns])


def test_initial_state_is_idle():
    state = TrackerState()

    assert state.phase is SearchPhase.IDLE
    assert state.flights == ()
    assert state.selected_flight is None
    assert state.message is None


def test_begin_search_requires_term():
    with pytest.raises(StateTransitionError):
        TrackerState().begin_search("")


def test_begin_search_clears_previous_result_selection_and_errors():
    state = loaded("HA92", "HA93").select(1).mint_failed(ErrorMessage("Failed to mint NFT"))

    state = state.begin_search("UAL")

    assert state.phase is SearchPhase.LOADING
    assert state.term == "UAL"
    assert state.flights == ()
    assert state.selected_index is None
    assert state.error is None
    assert state.mint_error is None


def test_success_keeps_selection_empty():
    state = loaded("HA92", "HA93")

    assert state.phase is SearchPhase.SUCCESS
    assert [f.number for f in state.flights] == ["HA92", "HA93"]
    assert state.selected_index is None


def test_success_with_no_flights_resolves_to_error():
    state = TrackerState().begin_search("HA")

    state = state.succeed(state.sequence, [])

    assert state.phase is SearchPhase.ERROR
    assert state.error.error == "No flights found matching your search"


def test_fail_stores_error_and_clears_result():
    state = TrackerState().begin_search("HA")

    state = state.fail(state.sequence, ErrorMessage("Failed to fetch flight data", "boom"))

    assert state.phase is SearchPhase.ERROR
    assert state.flights == ()
    assert state.message == ErrorMessage("Failed to fetch flight data", "boom")


def test_select_only_in_success_and_within_bounds():
    with pytest.raises(StateTransitionError):
        TrackerState().select(0)

    state = loaded("HA92")
    with pytest.raises(StateTransitionError):
        state.select(1)
    with pytest.raises(StateTransitionError):
        state.select(-1)

    assert state.select(0).selected_flight.number == "HA92"


def test_stale_response_is_discarded():
    first = TrackerState().begin_search("HA92")
    second = first.begin_search("UAL1")

    after_stale = second.succeed(first.sequence, [flight("HA92")])

    assert after_stale is second
    assert after_stale.phase is SearchPhase.LOADING

    resolved = after_stale.succeed(second.sequence, [flight("UAL1")])
    assert resolved.flights[0].number == "UAL1"
    assert resolved.fail(first.sequence, ErrorMessage("late")) is resolved


def test_resolving_twice_is_rejected():
    state = loaded("HA92")

    with pytest.raises(StateTransitionError):
        state.fail(state.sequence, ErrorMessage("again"))


def test_mint_error_does_not_change_search_phase():
    state = loaded("HA92").select(0)

    failed = state.mint_failed(ErrorMessage("Wallet not connected"))
    assert failed.phase is SearchPhase.SUCCESS
    assert failed.selected_index == 0
    assert failed.message.error == "Wallet not connected"

    cleared = failed.mint_succeeded()
    assert cleared.mint_error is None
    assert cleared.flights == state.flights
