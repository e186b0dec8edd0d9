"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Side(IntEnum):
    """A seat at the timer. Values are the ones the server uses in URLs and payloads."""

    HOME = 0
    AWAY = 1


class EventName(StrEnum):
    CONNECT = "connect"
    CONNECT_ERROR = "connect_error"
    DISCONNECT = "disconnect"
    STATE_UPDATE = "state_update"
    ERROR = "error"


# --- NOTE connect / connect_error / disconnect carry no payload, listeners receive None for these
CONNECTION_EVENTS: tuple[EventName, ...] = (
    EventName.CONNECT,
    EventName.CONNECT_ERROR,
    EventName.DISCONNECT,
)
