from flask import Blueprint, jsonify, request, current_app

from casa.store import get_store
from casa.services.game.errors import GameError, InvalidTheme
from casa.services.game.timer import start_timer, cancel_timer, claim_timer
from casa.services.game.purchase import preview_item, purchase_item


api = Blueprint('api', __name__)


@api.errorhandler(GameError)
def handle_game_error(exc: GameError):
    current_app.logger.info(f"[rejected] {request.method} {request.path} {type(exc).__name__}: {exc.message}")
    return jsonify({'error': exc.message}), 400


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@api.route('/state', methods=['GET'])
def get_state():
    return jsonify(get_store().snapshot())


@api.route('/timer/start', methods=['POST'])
def timer_start():
    data = _body()
    store = get_store()
    with store.lock:
        timer = start_timer(store.state, data.get('seconds'))
        payload = timer.to_dict()
    current_app.logger.info(f"[timer-start] duration={timer.duration_seconds}s")
    return jsonify(payload)


@api.route('/timer/cancel', methods=['POST'])
def timer_cancel():
    store = get_store()
    with store.lock:
        timer = cancel_timer(store.state)
        payload = timer.to_dict()
    current_app.logger.info(f"[timer-cancel] duration={timer.duration_seconds}s")
    return jsonify(payload)


@api.route('/timer/claim', methods=['POST'])
def timer_claim():
    store = get_store()
    with store.lock:
        result = claim_timer(store.state)
        store.persist()
    current_app.logger.info(f"[timer-claim] reward={result['reward']} points={result['points']}")
    return jsonify(result)


@api.route('/catalog', methods=['GET'])
def get_catalog():
    store = get_store()
    with store.lock:
        return jsonify([item.to_dict() for item in store.state.catalog])


@api.route('/house', methods=['GET'])
def get_house():
    store = get_store()
    with store.lock:
        return jsonify(store.state.house.to_dict())


@api.route('/preview', methods=['POST'])
def preview():
    data = _body()
    store = get_store()
    with store.lock:
        item = preview_item(store.state, data.get('slot'), data.get('itemId'))
    return jsonify({'preview': item.to_dict()})


@api.route('/purchase', methods=['POST'])
def purchase():
    data = _body()
    slot, item_id = data.get('slot'), data.get('itemId')
    store = get_store()
    with store.lock:
        result = purchase_item(store.state, slot, item_id)
        store.persist()
    current_app.logger.info(f"[purchase] slot={slot} item={item_id} points={result['points']}")
    return jsonify(result)


@api.route('/achievements', methods=['GET'])
def get_achievements():
    store = get_store()
    with store.lock:
        return jsonify(list(store.state.achievements))


@api.route('/theme', methods=['GET'])
def get_theme():
    store = get_store()
    with store.lock:
        return jsonify({'theme': store.state.theme})


@api.route('/theme', methods=['POST'])
def set_theme():
    theme = _body().get('theme')
    if not isinstance(theme, str) or not theme.strip():
        raise InvalidTheme()
    store = get_store()
    with store.lock:
        store.state.theme = theme
        store.persist()
    current_app.logger.info(f"[theme] theme={theme}")
    return jsonify({'theme': theme})
