from flask import Blueprint, current_app

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return current_app.send_static_file('index.html')


@main.route('/ping')
def ping():
    return 'pong', 200, {'Content-Type': 'text/plain; charset=utf-8'}
