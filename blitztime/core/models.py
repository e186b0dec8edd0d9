"""
Boundary layer data model(s).

Plain objects handed to the application by the api and services layers.
(The pydantic models in blitztime/api/models.py only describe what goes over the wire.)
"""

from dataclasses import dataclass
from typing import Optional

TIMER_HEADER = "Blitztime-Timer"
TOKEN_HEADER = "Authorization"


@dataclass(frozen=True)
class SocketCredentials:
    """Credentials for connecting to a timer socket. No token means an observer (read-only) connection."""

    timer: int
    token: Optional[str] = None

    @property
    def is_observer(self) -> bool:
        return not self.token

    def headers(self) -> dict[str, str]:
        headers = {TIMER_HEADER: str(self.timer)}
        if self.token:
            headers[TOKEN_HEADER] = self.token
        return headers


@dataclass(frozen=True)
class AppStats:
    """Usage stats for the app."""

    all_timers: int
    ongoing_timers: int
    connected: int
