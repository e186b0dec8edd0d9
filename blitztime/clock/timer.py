"""
The state of a timer as last declared by the server (a snapshot), and the live clock values derived from it.

A snapshot is never updated in place: every state push from the server builds a new Timer.
The clock values are not stored anywhere, they are computed from the snapshot and "now" whenever they are asked for.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from blitztime.api.models import SidePayload, TimerPayload
from blitztime.clock.instants import NEVER, ZERO, load_datetime, load_duration, utc_now
from blitztime.clock.stages import StageSettings, resolve_stage
from blitztime.core.exceptions import MalformedSnapshotError
from blitztime.core.shared_types import Side


@dataclass(frozen=True)
class Timer:
    """Snapshot of one timer. Frozen: it is replaced wholesale, never patched."""

    id: int
    turn_number: int
    turn_started_at: Optional[datetime]
    started_at: Optional[datetime]
    has_ended: bool
    end_reporter: Optional[Side]
    observers: int
    managed: bool
    settings: list[StageSettings]
    home: Optional[TimerSide] = None
    away: Optional[TimerSide] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> Timer:
        """Build a snapshot from a raw payload pushed by (or fetched from) the server."""
        try:
            payload = TimerPayload.model_validate(data)
        except ValidationError as exc:
            raise MalformedSnapshotError(f"Cannot read timer snapshot: {exc}") from exc

        # Values that pass validation can still be out of range for datetime / timedelta
        try:
            timer = cls(
                id=payload.id,
                turn_number=payload.turn_number,
                turn_started_at=_optional_datetime(payload.turn_started_at),
                started_at=_optional_datetime(payload.started_at),
                has_ended=payload.has_ended,
                end_reporter=payload.end_reporter,
                observers=payload.observers,
                managed=payload.managed,
                settings=[StageSettings.from_payload(stage) for stage in payload.settings],
            )
            # Sides need the timer they belong to, so they can only be attached once it exists
            home = TimerSide.from_payload(payload.home, timer) if payload.home else None
            away = TimerSide.from_payload(payload.away, timer) if payload.away else None
        except (OverflowError, OSError, ValueError) as exc:
            raise MalformedSnapshotError(f"Timer snapshot value out of range: {exc}") from exc
        object.__setattr__(timer, "home", home)
        object.__setattr__(timer, "away", away)
        return timer

    @property
    def has_started(self) -> bool:
        return self.turn_started_at is not None

    @property
    def stage_settings(self) -> StageSettings:
        """Settings of the stage the current turn falls in."""
        return resolve_stage(self.turn_number, self.settings)

    @property
    def current_side(self) -> Optional[TimerSide]:
        """The side whose turn it is (None before the start, or if no seated side is on turn)."""
        for timer_side in (self.home, self.away):
            if timer_side is not None and timer_side.is_turn:
                return timer_side
        return None

    def get_side(self, side: Side) -> Optional[TimerSide]:
        return self.home if side == Side.HOME else self.away


@dataclass(frozen=True)
class TimerSide:
    """
    One player's clock.
    ----
    `timer` is a lookup reference to the owning snapshot, excluded from comparison and repr.
    """

    is_turn: bool
    total_time_last_turn: timedelta
    connected: bool
    timer: Timer = field(repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: SidePayload, timer: Timer) -> TimerSide:
        return cls(
            is_turn=payload.is_turn,
            total_time_last_turn=load_duration(payload.total_time),
            connected=payload.connected,
            timer=timer,
        )

    def total_time_remaining(self, now: Optional[datetime] = None) -> timedelta:
        """
        Time left in the bank right now.
        ----
        NOTE: Not clamped. A negative value is how much this side has overrun its clock.
        """
        stage = self.timer.stage_settings
        if self.timer.turn_started_at is None:
            return stage.initial_time
        if not self.is_turn:
            return self.total_time_last_turn

        overage = self._time_spent(now) - stage.fixed_time_per_turn
        if overage <= ZERO:
            # still within the free allotment of this turn
            return self.total_time_last_turn
        return self.total_time_last_turn - overage

    def turn_time_remaining(self, now: Optional[datetime] = None) -> timedelta:
        """Time left in the fixed allotment of the current turn (clamped to zero)."""
        stage = self.timer.stage_settings
        if self.timer.turn_started_at is None or not self.is_turn:
            return stage.fixed_time_per_turn

        remaining = stage.fixed_time_per_turn - self._time_spent(now)
        return remaining if remaining > ZERO else ZERO

    @property
    def times_out_at(self) -> datetime:
        """The instant this side runs out of time if nothing changes. NEVER while the timer has not started."""
        if self.timer.turn_started_at is None:
            return NEVER
        return (
            self.timer.turn_started_at
            + self.total_time_last_turn
            + self.timer.stage_settings.fixed_time_per_turn
        )

    def has_timed_out(self, now: Optional[datetime] = None) -> bool:
        """Advisory only, the server decides when a timer actually ends."""
        if self.timer.turn_started_at is None or not self.is_turn:
            return False
        return (now or utc_now()) >= self.times_out_at

    def _time_spent(self, now: Optional[datetime]) -> timedelta:
        assert self.timer.turn_started_at is not None
        return (now or utc_now()) - self.timer.turn_started_at


def _optional_datetime(seconds: Optional[float]) -> Optional[datetime]:
    return load_datetime(seconds) if seconds is not None else None
