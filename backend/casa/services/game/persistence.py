import json
import logging
import os
from pathlib import Path

from casa.models import GameState, GameTimer, House
from .catalog import seed_state
from .timer import MAX_DURATION_SEC

_log = logging.getLogger(__name__)


def save_state(state: GameState, path, logger=None) -> bool:
    """Write the whole state as indented JSON, replacing the previous dump.

    Returns False when the write failed; the in-memory state is untouched.
    """
    logger = logger or _log
    path = Path(path)
    tmp = path.with_name(path.name + '.tmp')
    try:
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, 'w', encoding='utf-8') as f:
            json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
    except OSError:
        logger.exception(f"[state-save] failed to write {path}")
        try:
            tmp.unlink()
        except OSError:
            pass
        return False
    logger.debug(f"[state-save] wrote {path} points={state.points}")
    return True


def _camel_keys(data) -> dict:
    # The first release wrote PascalCase keys (Points, Timer.StartUtc)
    if not isinstance(data, dict):
        return {}
    return {k[:1].lower() + k[1:] if isinstance(k, str) else k: v for k, v in data.items()}


def _restore_timer(data, logger) -> GameTimer:
    timer = GameTimer.from_dict(_camel_keys(data))
    if not timer.is_running and not timer.cancelled:
        return GameTimer()
    valid = (
        timer.start_time is not None
        and 0 < timer.duration_seconds <= MAX_DURATION_SEC
    )
    if not valid:
        logger.warning(
            f"[state-load] discarding timer running={timer.is_running} "
            f"duration={timer.duration_seconds} start={timer.start_time}"
        )
        return GameTimer()
    return timer


def _restore(data: dict, logger) -> GameState:
    data = _camel_keys(data)
    state = seed_state()
    state.points = max(0, int(data.get('points') or 0))
    state.timer = _restore_timer(data.get('timer'), logger)
    theme = data.get('theme')
    if isinstance(theme, str) and theme.strip():
        state.theme = theme
    elif theme is not None:
        logger.warning(f"[state-load] ignoring theme {theme!r}")
    state.achievements = list(dict.fromkeys(str(a) for a in data.get('achievements') or []))

    # Slots and catalog always come from the seed; keep only placements that
    # still fit it
    saved = House.from_dict(_camel_keys(data.get('house'))).placed
    for slot, item_id in saved.items():
        item = state.find_item(item_id)
        if slot not in state.house.slots or item is None or item.slot != slot:
            logger.warning(f"[state-load] dropping placement {slot}={item_id}")
            continue
        state.house.placed[slot] = item_id
    return state


def load_or_seed(path, logger=None) -> GameState:
    """Load the persisted state, or start fresh if it is missing or unreadable."""
    logger = logger or _log
    path = Path(path)
    if not path.exists():
        logger.info(f"[state-load] no saved state at {path}, seeding")
        return seed_state()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError('state document is not an object')
        state = _restore(data, logger)
    except Exception as exc:
        logger.warning(f"[state-load] could not read {path} ({exc}), seeding")
        return seed_state()
    logger.info(f"[state-load] restored {path} points={state.points} placed={len(state.house.placed)}")
    return state
