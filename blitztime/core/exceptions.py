"""Custom exceptions, shared by the clock, api and services layers."""


class BlitztimeError(Exception):
    """Top-level exception for anything raised by this library."""


# --- Clock / snapshot errors ---
class MalformedSnapshotError(BlitztimeError):
    """A payload from the server (timer snapshot or other response) does not have the expected shape. Protocol mismatch."""


class InvalidConfigurationError(BlitztimeError):
    """The stage schedule of a timer has no stage starting at turn 0."""


# --- Remote errors ---
class ApiError(BlitztimeError):
    """The server rejected a request or command."""

    def __init__(self, detail: str, code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(detail={self.detail!r}, code={self.code})"


class TransportError(BlitztimeError):
    """Could not reach the server over the socket."""
