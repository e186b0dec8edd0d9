"""Wire models: the payloads the server sends and accepts"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from blitztime.core.shared_types import Side


# --- INBOUND MODELS ---
class StagePayload(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    start_turn: int = Field(ge=0)
    seconds_fixed_per_turn: float
    # NOTE: the misspelling is the server's field name
    seconds_incremement_per_turn: float
    # The server reads (and sends) "inital_seconds". Both spellings are accepted, the server's one is written.
    initial_seconds: float = Field(
        validation_alias=AliasChoices("initial_seconds", "inital_seconds"),
        serialization_alias="inital_seconds",
    )


class SidePayload(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    is_turn: bool
    total_time: float  # seconds banked as of the start of the current turn
    connected: bool


class TimerPayload(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: int
    turn_number: int
    turn_started_at: Optional[float]  # epoch seconds, null before the timer starts
    started_at: Optional[float]
    has_ended: bool
    end_reporter: Optional[Side]
    observers: int
    managed: bool
    settings: list[StagePayload]
    home: Optional[SidePayload]
    away: Optional[SidePayload]


class ErrorPayload(BaseModel):
    detail: str
    code: int = 400


class StatsPayload(BaseModel):
    all_timers: int
    ongoing_timers: int
    connected: int


class CredentialsPayload(BaseModel):
    timer: int
    token: Optional[str] = None


# --- OUTBOUND MODELS ---
class CreateTimerRequest(BaseModel):
    stages: list[StagePayload]
    as_manager: bool = False
