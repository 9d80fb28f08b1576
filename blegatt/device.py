"""Device power states."""

from __future__ import annotations

from enum import IntEnum


class State(IntEnum):
    UNKNOWN = 0
    RESETTING = 1
    UNSUPPORTED = 2
    UNAUTHORIZED = 3
    POWERED_OFF = 4
    POWERED_ON = 5

    def __str__(self) -> str:
        return _STATE_NAMES[self]


_STATE_NAMES = {
    State.UNKNOWN: "Unknown",
    State.RESETTING: "Resetting",
    State.UNSUPPORTED: "Unsupported",
    State.UNAUTHORIZED: "Unauthorized",
    State.POWERED_OFF: "PoweredOff",
    State.POWERED_ON: "PoweredOn",
}