from datetime import datetime, timezone
from typing import Optional

from casa.models import GameState, GameTimer
from .achievements import refresh_achievements
from .errors import InvalidDuration, TimerAlreadyRunning, NoActiveTimer, TimerCancelled, TimerNotFinished

MAX_DURATION_SEC = 24 * 60 * 60
# Clients poll, so a claim may land slightly before the exact deadline
CLAIM_GRACE_SEC = 0.5
REWARD_DIVISOR = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def compute_reward(duration_seconds: int) -> int:
    return max(1, duration_seconds // REWARD_DIVISOR)


def _coerce_seconds(seconds) -> int:
    # bool is an int subclass; True must not mean a one second timer
    if isinstance(seconds, bool):
        raise InvalidDuration()
    if isinstance(seconds, float):
        if not seconds.is_integer():
            raise InvalidDuration()
        seconds = int(seconds)
    if not isinstance(seconds, int):
        try:
            seconds = int(str(seconds).strip())
        except (TypeError, ValueError):
            raise InvalidDuration()
    return seconds


def start_timer(state: GameState, seconds, now: Optional[datetime] = None) -> GameTimer:
    seconds = _coerce_seconds(seconds)
    if seconds <= 0 or seconds > MAX_DURATION_SEC:
        raise InvalidDuration()
    if state.timer.is_running:
        raise TimerAlreadyRunning()
    state.timer = GameTimer(
        is_running=True,
        start_time=now or _utcnow(),
        duration_seconds=seconds,
        cancelled=False,
    )
    return state.timer


def cancel_timer(state: GameState) -> GameTimer:
    timer = state.timer
    if not timer.is_running:
        raise NoActiveTimer()
    timer.is_running = False
    timer.cancelled = True
    return timer


def elapsed_seconds(timer: GameTimer, now: Optional[datetime] = None) -> float:
    if timer.start_time is None:
        return 0.0
    return ((now or _utcnow()) - timer.start_time).total_seconds()


def remaining_seconds(timer: GameTimer, now: Optional[datetime] = None) -> float:
    if not timer.is_running:
        return 0.0
    return max(0.0, timer.duration_seconds - elapsed_seconds(timer, now))


def claim_timer(state: GameState, now: Optional[datetime] = None) -> dict:
    """Pay out a finished timer and reset it.

    Returns {'reward', 'points', 'achievements'}. The caller persists.
    """
    timer = state.timer
    if not timer.is_running:
        raise NoActiveTimer()
    if timer.cancelled:
        raise TimerCancelled()
    if elapsed_seconds(timer, now) + CLAIM_GRACE_SEC < timer.duration_seconds:
        raise TimerNotFinished()

    reward = compute_reward(timer.duration_seconds)
    state.points += reward
    state.timer = GameTimer()
    refresh_achievements(state)
    return {
        'reward': reward,
        'points': state.points,
        'achievements': list(state.achievements),
    }
