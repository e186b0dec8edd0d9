"""Socket.IO connection to a timer: receives state pushes and errors, sends the player's commands."""

import logging
from types import TracebackType
from typing import Any, Awaitable, Callable, Optional, Self

import socketio
from pydantic import ValidationError

from blitztime.api.models import ErrorPayload
from blitztime.clock.timer import Timer
from blitztime.core.config import get_settings
from blitztime.core.exceptions import ApiError, MalformedSnapshotError, TransportError
from blitztime.core.models import SocketCredentials
from blitztime.core.shared_types import CONNECTION_EVENTS, EventName
from blitztime.services.dispatcher import EventDispatcher, Listener

logger = logging.getLogger(__name__)


class TimerConnection:
    """
    A connection to a timer socket.
    ----
    `state` always holds the latest full snapshot pushed by the server (None until the first push).
    It is swapped for a new Timer on every push, so a reader never sees half of an update.
    """

    def __init__(
        self,
        credentials: SocketCredentials,
        api_url: Optional[str] = None,
        *,
        client: Optional[socketio.AsyncClient] = None,
        dispatcher: Optional[EventDispatcher] = None,
    ) -> None:
        settings = get_settings()
        self.credentials = credentials
        self.api_url = api_url or settings.api_url
        self.socketio_path = settings.socketio_path
        self.observer = credentials.is_observer
        self.state: Optional[Timer] = None
        self.dispatcher = dispatcher or EventDispatcher()
        self.socket = client or socketio.AsyncClient()

        for event in CONNECTION_EVENTS:
            self.socket.on(event.value, self._forward(event))
        self.socket.on("state", self._on_state_update)
        self.socket.on("error", self._on_error)

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.disconnect()

    # -- Connection --
    async def connect(self) -> None:
        """Open the connection (no-op if already open)."""
        if self.socket.connected:
            return
        logger.info(
            "Connecting to timer %d as %s",
            self.credentials.timer,
            "observer" if self.observer else "player",
        )
        try:
            await self.socket.connect(
                self.api_url,
                headers=self.credentials.headers(),
                socketio_path=self.socketio_path,
            )
        except socketio.exceptions.ConnectionError as exc:
            raise TransportError(
                f"Could not connect to timer {self.credentials.timer}: {exc}"
            ) from exc

    async def disconnect(self) -> None:
        """Close the connection (no-op if already closed)."""
        if self.socket.connected:
            await self.socket.disconnect()

    async def wait(self) -> None:
        """Block until the connection is closed for good."""
        await self.socket.wait()

    # -- Listeners --
    def add_listener(self, event: EventName, listener: Listener) -> None:
        self.dispatcher.add_listener(event, listener)

    def remove_listener(self, event: EventName, listener: Listener) -> None:
        self.dispatcher.remove_listener(event, listener)

    # -- Commands --
    async def start_timer(self) -> None:
        """Start the timer once away has joined (host only)."""
        await self._emit("start_timer")

    async def end_turn(self) -> None:
        """End the player's turn."""
        await self._emit("end_turn")

    async def opponent_timed_out(self) -> None:
        """Notify the server that the player's opponent has timed out."""
        await self._emit("opponent_timed_out")

    async def add_time(self, seconds: float) -> None:
        """Add time to both players' clocks."""
        await self._emit("add_time", seconds)

    # -- Inbound events --
    async def _on_state_update(self, raw_state: Any) -> None:
        try:
            state = Timer.from_payload(raw_state)
        except MalformedSnapshotError as exc:
            logger.error("Discarding state push for timer %d: %s", self.credentials.timer, exc)
            await self.dispatcher.fire(EventName.ERROR, exc)
            return
        self.state = state
        logger.debug("Timer %d now at turn %d", state.id, state.turn_number)
        await self.dispatcher.fire(EventName.STATE_UPDATE, state)

    async def _on_error(self, raw_error: Any) -> None:
        try:
            payload = ErrorPayload.model_validate(raw_error)
            error = ApiError(payload.detail, payload.code)
        except ValidationError:
            error = ApiError(str(raw_error))
        logger.warning("Timer %d reported an error: %r", self.credentials.timer, error)
        await self.dispatcher.fire(EventName.ERROR, error)

    def _forward(self, event: EventName) -> Callable[..., Awaitable[None]]:
        """Handler for the transport's own connection events, which carry no payload for listeners."""

        async def handler(*_: Any) -> None:
            logger.info("Timer %d: %s", self.credentials.timer, event.value)
            await self.dispatcher.fire(event)

        return handler

    async def _emit(self, event: str, data: Any = None) -> None:
        logger.debug("Emitting %r to timer %d", event, self.credentials.timer)
        try:
            await self.socket.emit(event, data)
        except socketio.exceptions.SocketIOError as exc:
            raise TransportError(f"Could not send {event!r}: {exc}") from exc
