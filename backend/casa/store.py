import threading

from flask import current_app

from casa.models import GameState
from casa.services.game.catalog import seed_state
from casa.services.game.persistence import load_or_seed, save_state

EXTENSION_KEY = 'game_store'


class GameStateStore:
    """Owns the game state of one app and the lock that serializes mutations.

    Handlers take `lock` around every read-modify-write so two concurrent
    purchases cannot both spend the same points.
    """

    def __init__(self, state: GameState, path=None, persist=True, logger=None):
        self.state = state
        self.path = path
        self.persist_enabled = bool(persist and path)
        self.logger = logger
        self.lock = threading.RLock()

    @classmethod
    def from_config(cls, config, logger=None):
        path = config.get('GAME_STATE_FILE')
        persist = config.get('PERSIST_STATE', True)
        state = load_or_seed(path, logger) if path else seed_state()
        return cls(state, path=path, persist=persist, logger=logger)

    def persist(self) -> bool:
        if not self.persist_enabled:
            return False
        with self.lock:
            return save_state(self.state, self.path, self.logger)

    def reset(self) -> GameState:
        with self.lock:
            self.state = seed_state()
            self.persist()
            return self.state

    def snapshot(self) -> dict:
        with self.lock:
            return self.state.to_dict()

    def init_app(self, app):
        app.extensions[EXTENSION_KEY] = self


def get_store() -> GameStateStore:
    return current_app.extensions[EXTENSION_KEY]
