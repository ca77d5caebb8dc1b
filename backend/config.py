import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


class Config:
    # Flat JSON document holding the whole game state
    GAME_STATE_FILE = os.environ.get('GAME_STATE_FILE') or 'game_state.json'
    PERSIST_STATE = _env_flag('PERSIST_STATE', True)
    # Origins allowed to call the API when the client is served elsewhere
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5280,http://127.0.0.1:5280',
        ).split(',') if o.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Dev server bind address (run.py)
    HOST = os.environ.get('HOST', 'localhost')
    PORT = int(os.environ.get('PORT', '5280'))
