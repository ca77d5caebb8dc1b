import json
from datetime import datetime, timezone

import pytest

from casa import create_app
from casa.models import GameTimer
from casa.services.game.errors import NoActiveTimer
from casa.services.game.catalog import HOUSE_SLOTS, seed_catalog
from casa.services.game.persistence import load_or_seed, save_state
from casa.services.game.timer import claim_timer, start_timer


def test_missing_file_seeds(tmp_path):
    state = load_or_seed(tmp_path / 'nope.json')
    assert state.points == 0
    assert state.theme == 'default'
    assert state.house.slots == list(HOUSE_SLOTS)
    assert len(state.catalog) == len(seed_catalog())


def test_save_then_load(tmp_path, state):
    path = tmp_path / 'state.json'
    state.points = 42
    state.theme = 'dark'
    state.achievements = ['Primera compra']
    state.house.placed['sofa'] = 'sofa_clasico'
    start_timer(state, 120, now=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert save_state(state, path) is True

    raw = path.read_text(encoding='utf-8')
    assert '\n  "points": 42' in raw
    assert 'Sofá clásico' in raw
    assert not (tmp_path / 'state.json.tmp').exists()

    loaded = load_or_seed(path)
    assert loaded.points == 42
    assert loaded.theme == 'dark'
    assert loaded.achievements == ['Primera compra']
    assert loaded.house.placed == {'sofa': 'sofa_clasico'}
    assert loaded.timer.is_running is True
    assert loaded.timer.duration_seconds == 120
    assert loaded.timer.start_time == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_corrupt_file_falls_back_to_seed(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text('{ not json', encoding='utf-8')
    state = load_or_seed(path)
    assert state.points == 0
    assert state.house.placed == {}


def test_non_object_document_falls_back_to_seed(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text('[1, 2, 3]', encoding='utf-8')
    assert load_or_seed(path).points == 0


def test_catalog_and_slots_come_from_seed(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text(json.dumps({
        'points': 5,
        'house': {'slots': ['sofa'], 'placed': {'sofa': 'sofa_moderno'}},
        'catalog': [{'id': 'sofa_moderno', 'slot': 'sofa', 'category': 'x', 'name': 'x', 'cost': 1, 'image': ''}],
    }), encoding='utf-8')
    state = load_or_seed(path)
    assert state.house.slots == list(HOUSE_SLOTS)
    assert state.find_item('sofa_moderno').cost == 45
    assert state.house.placed == {'sofa': 'sofa_moderno'}


def test_invalid_placements_are_dropped(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text(json.dumps({
        'points': 1,
        'house': {'placed': {'garaje': 'coche', 'mesa': 'sofa_clasico', 'cuadro': 'retirado', 'lampara': 'lampara_pie'}},
    }), encoding='utf-8')
    assert load_or_seed(path).house.placed == {'lampara': 'lampara_pie'}


def test_legacy_start_utc_key(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text(json.dumps({
        'points': 0,
        'timer': {'isRunning': True, 'startUtc': '2024-03-01T10:00:00Z', 'durationSeconds': 60, 'cancelled': False},
    }), encoding='utf-8')
    timer = load_or_seed(path).timer
    assert timer.is_running is True
    assert timer.start_time == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)


def test_save_failure_is_reported(tmp_path, state):
    # The target is a directory, so the final rename fails
    target = tmp_path / 'occupied'
    target.mkdir()
    (target / 'child').write_text('x', encoding='utf-8')
    assert save_state(state, target) is False


def test_app_restores_saved_state(tmp_path, state):
    path = tmp_path / 'state.json'
    state.points = 9
    save_state(state, path)

    class Cfg:
        TESTING = True
        GAME_STATE_FILE = str(path)

    client = create_app(Cfg).test_client()
    assert client.get('/api/state').get_json()['points'] == 9


def test_persistence_can_be_disabled(tmp_path):
    path = tmp_path / 'state.json'

    class Cfg:
        TESTING = True
        GAME_STATE_FILE = str(path)
        PERSIST_STATE = False

    client = create_app(Cfg).test_client()
    assert client.post('/api/theme', json={'theme': 'dark'}).status_code == 200
    assert not path.exists()


def _write(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


@pytest.mark.parametrize('timer', [
    {'isRunning': True, 'durationSeconds': 0},
    {'isRunning': True, 'durationSeconds': 86400},
    {'isRunning': True, 'startTime': '2024-01-01T00:00:00+00:00', 'durationSeconds': -3},
    {'isRunning': True, 'startTime': '2024-01-01T00:00:00+00:00', 'durationSeconds': 86401},
    {'isRunning': False, 'cancelled': True, 'durationSeconds': 30},
])
def test_broken_timer_is_reset(tmp_path, timer):
    state = load_or_seed(_write(tmp_path / 'state.json', {'points': 4, 'timer': timer}))
    assert state.points == 4
    assert state.timer == GameTimer()
    with pytest.raises(NoActiveTimer):
        claim_timer(state)
    start_timer(state, 10)
    assert state.timer.is_running is True


def test_idle_timer_is_normalized(tmp_path):
    path = _write(tmp_path / 'state.json', {
        'timer': {'isRunning': False, 'startTime': '0001-01-01T00:00:00+00:00', 'durationSeconds': 0, 'cancelled': False},
    })
    assert load_or_seed(path).timer == GameTimer()


def test_cancelled_timer_survives_reload(tmp_path):
    path = _write(tmp_path / 'state.json', {
        'timer': {'isRunning': False, 'startTime': '2024-01-01T00:00:00+00:00', 'durationSeconds': 30, 'cancelled': True},
    })
    timer = load_or_seed(path).timer
    assert timer.cancelled is True
    assert timer.duration_seconds == 30


def test_first_release_pascal_case_dump(tmp_path):
    path = _write(tmp_path / 'state.json', {
        'Points': 12,
        'Timer': {'IsRunning': True, 'StartUtc': '2024-03-01T10:00:00.1234567+00:00', 'DurationSeconds': 60, 'Cancelled': False},
        'Catalog': [],
        'House': {'Slots': ['sofa'], 'Placed': {'mesa': 'mesa_vidrio'}},
        'Theme': 'dark',
        'Achievements': ['Primera compra'],
    })
    state = load_or_seed(path)
    assert state.points == 12
    assert state.theme == 'dark'
    assert state.achievements == ['Primera compra']
    assert state.house.placed == {'mesa': 'mesa_vidrio'}
    assert state.timer.is_running is True
    assert state.timer.duration_seconds == 60
    assert state.timer.start_time == datetime(2024, 3, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.mark.parametrize('theme', [['x'], 7, '', '   ', {'name': 'dark'}])
def test_invalid_theme_falls_back_to_default(tmp_path, theme):
    state = load_or_seed(_write(tmp_path / 'state.json', {'points': 1, 'theme': theme}))
    assert state.points == 1
    assert state.theme == 'default'
