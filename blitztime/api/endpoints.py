"""Wrappers for the HTTP endpoints."""

import logging
from types import TracebackType
from typing import Any, Iterable, Optional, Self, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from blitztime.api.models import (
    CreateTimerRequest,
    CredentialsPayload,
    ErrorPayload,
    StatsPayload,
)
from blitztime.clock.stages import StageSettings
from blitztime.clock.timer import Timer
from blitztime.core.config import get_settings
from blitztime.core.exceptions import ApiError, MalformedSnapshotError, TransportError
from blitztime.core.models import AppStats, SocketCredentials
from blitztime.core.shared_types import Side

logger = logging.getLogger(__name__)

PayloadModel = TypeVar("PayloadModel", bound=BaseModel)


class HttpClient:
    """A client for making requests to HTTP endpoints."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.client = httpx.AsyncClient(
            base_url=api_url or settings.api_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # -- Endpoints --
    async def get_stats(self) -> AppStats:
        """Get usage stats for the app."""
        response = await self._request("GET", "/stats")
        stats = _parse(StatsPayload, response)
        return AppStats(
            all_timers=stats.all_timers,
            ongoing_timers=stats.ongoing_timers,
            connected=stats.connected,
        )

    async def get_timer(self, timer_id: int) -> Timer:
        """Get the current state of a timer."""
        response = await self._request("GET", f"/timer/{timer_id}")
        return Timer.from_payload(response)

    async def join_timer(self, timer_id: int, side: Side) -> SocketCredentials:
        """Take a seat at a timer, returns the credentials to connect to its socket as that player."""
        response = await self._request("POST", f"/timer/{timer_id}/{int(Side(side))}")
        return _credentials(response)

    async def create_timer(
        self, settings: Iterable[StageSettings], as_manager: bool = False
    ) -> SocketCredentials:
        """Create a new timer with the given stages. A manager controls the timer without playing on it."""
        request = CreateTimerRequest(
            stages=[stage.dump() for stage in settings],
            as_manager=as_manager,
        )
        response = await self._request("POST", "/timer", request.model_dump(by_alias=True))
        return _credentials(response)

    # -- Internal helpers --
    async def _request(
        self, method: str, endpoint: str, body: Optional[dict[str, Any]] = None
    ) -> Any:
        """Send a request and turn error responses into ApiError."""
        logger.debug("%s %s", method, endpoint)
        try:
            response = await self.client.request(method, endpoint, json=body)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {endpoint} failed: {exc}") from exc

        if response.status_code >= 400:
            error = ApiError(_error_detail(response), response.status_code)
            logger.warning("%s %s rejected: %r", method, endpoint, error)
            raise error
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedSnapshotError(
                f"{method} {endpoint} returned a body that is not JSON."
            ) from exc


def _parse(model: type[PayloadModel], data: Any) -> PayloadModel:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedSnapshotError(f"Unexpected {model.__name__}: {exc}") from exc


def _credentials(data: Any) -> SocketCredentials:
    credentials = _parse(CredentialsPayload, data)
    return SocketCredentials(timer=credentials.timer, token=credentials.token)


def _error_detail(response: httpx.Response) -> str:
    """The server's "detail" message if the body has one, otherwise whatever text came back."""
    try:
        return ErrorPayload.model_validate(response.json()).detail
    except ValueError:
        return response.text or response.reason_phrase
