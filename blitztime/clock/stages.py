"""Time-control stages, and finding the one that applies to a given turn."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterable

from blitztime.api.models import StagePayload
from blitztime.clock.instants import dump_duration, load_duration
from blitztime.core.exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class StageSettings:
    """
    Settings for one stage of a timer.
    A stage applies from start_turn (counted in turn pairs, so one move by each side) until the next stage starts.
    """

    start_turn: int
    fixed_time_per_turn: timedelta
    increment_per_turn: timedelta
    initial_time: timedelta

    @classmethod
    def from_payload(cls, payload: StagePayload) -> StageSettings:
        return cls(
            start_turn=payload.start_turn,
            fixed_time_per_turn=load_duration(payload.seconds_fixed_per_turn),
            increment_per_turn=load_duration(payload.seconds_incremement_per_turn),
            initial_time=load_duration(payload.initial_seconds),
        )

    def dump(self) -> dict[str, Any]:
        """Encode into the format the server accepts when creating a timer."""
        return StagePayload(
            start_turn=self.start_turn,
            seconds_fixed_per_turn=dump_duration(self.fixed_time_per_turn),
            seconds_incremement_per_turn=dump_duration(self.increment_per_turn),
            initial_seconds=dump_duration(self.initial_time),
        ).model_dump(by_alias=True)


def turn_pair(turn_number: int) -> int:
    """Each side moving once makes one turn pair. Negative turn numbers are treated as the first pair."""
    return turn_number // 2 if turn_number >= 0 else 0


def resolve_stage(turn_number: int, settings: Iterable[StageSettings]) -> StageSettings:
    """
    Get the stage that governs the turn pair of this turn number: the one with the largest start_turn not past it.
    ----
    NOTE: stages may be stored in any order. With duplicate start_turn values the one stored last wins.
    A schedule without a stage starting at 0 is rejected for every turn, not only for the turns it leaves uncovered.
    """
    # Sorting the reversed list keeps the last stored stage first among equal start_turn values
    stages = sorted(reversed(list(settings)), key=lambda s: s.start_turn, reverse=True)
    if not any(stage.start_turn == 0 for stage in stages):
        raise InvalidConfigurationError(
            "Invalid settings detected: no first stage (a stage with start_turn 0)."
        )

    current_pair = turn_pair(turn_number)
    return next(stage for stage in stages if stage.start_turn <= current_pair)
