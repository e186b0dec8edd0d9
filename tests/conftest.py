"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures shared by the clock, api and services tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from blitztime.clock.stages import StageSettings

# Reference instant for a turn start: 2023-11-14 22:13:20 UTC
TURN_STARTED_EPOCH = 1_700_000_000
TURN_STARTED_AT = datetime.fromtimestamp(TURN_STARTED_EPOCH, tz=timezone.utc)


@pytest.fixture
def turn_started_at() -> datetime:
    return TURN_STARTED_AT


@pytest.fixture
def blitz_stage() -> StageSettings:
    """5 minutes in the bank, 30s increment, no free time per turn."""
    return StageSettings(
        start_turn=0,
        fixed_time_per_turn=timedelta(0),
        increment_per_turn=timedelta(seconds=30),
        initial_time=timedelta(seconds=300),
    )


@pytest.fixture
def stage_payload() -> dict[str, Any]:
    return {
        "start_turn": 0,
        "seconds_fixed_per_turn": 0,
        "seconds_incremement_per_turn": 30,
        "initial_seconds": 300,
    }


@pytest.fixture
def timer_payload(stage_payload: dict[str, Any]) -> dict[str, Any]:
    """A running timer, home to move on the very first turn with a full bank."""
    return {
        "id": 42,
        "turn_number": 0,
        "turn_started_at": TURN_STARTED_EPOCH,
        "started_at": TURN_STARTED_EPOCH,
        "has_ended": False,
        "end_reporter": None,
        "observers": 3,
        "managed": False,
        "settings": [stage_payload],
        "home": {"is_turn": True, "total_time": 300, "connected": True},
        "away": {"is_turn": False, "total_time": 300, "connected": True},
    }


@pytest.fixture
def waiting_timer_payload(timer_payload: dict[str, Any]) -> dict[str, Any]:
    """Same timer, before it was started: away has not joined yet."""
    timer_payload.update(
        turn_started_at=None,
        started_at=None,
        home={"is_turn": False, "total_time": 300, "connected": True},
        away=None,
    )
    return timer_payload
