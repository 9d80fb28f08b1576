import pytest

from blegatt.device import State


@pytest.mark.parametrize(
    "state, text",
    [
        (State.UNKNOWN, "Unknown"),
        (State.RESETTING, "Resetting"),
        (State.UNSUPPORTED, "Unsupported"),
        (State.UNAUTHORIZED, "Unauthorized"),
        (State.POWERED_OFF, "PoweredOff"),
        (State.POWERED_ON, "PoweredOn"),
    ],
)
def test_state_str(state, text):
    assert str(state) == text


def test_state_from_value_round_trip():
    for state in State:
        assert State(int(state)) is state


def test_state_in_format_string():
    assert f"State: {State(5)}" == "State: PoweredOn"


def test_invalid_state_raises():
    with pytest.raises(ValueError):
        State(6)