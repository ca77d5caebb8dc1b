import os
import sys
import pytest

# Ensure the backend root (containing the `casa` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from casa import create_app
from casa.store import get_store
from casa.services.game.catalog import seed_state


@pytest.fixture()
def state_file(tmp_path):
    return tmp_path / 'game_state.json'


@pytest.fixture()
def flask_app(state_file):
    class TestConfig:
        TESTING = True
        GAME_STATE_FILE = str(state_file)
        PERSIST_STATE = True
        CORS_ORIGINS = ['http://localhost:5173']
        LOG_LEVEL = 'DEBUG'

    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def store(flask_app):
    return get_store()


@pytest.fixture()
def state():
    return seed_state()
