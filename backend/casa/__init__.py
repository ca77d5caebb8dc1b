import json
import os

from flask import Flask
from flask_cors import CORS
import click
from config import Config

from casa.store import GameStateStore
from casa.services.game.catalog import seed_document
from casa.services.game.timer import remaining_seconds


def create_app(config_class=Config):
    # Static client is served from the site root, like /main.js
    flask_app = Flask(__name__, static_folder='static', static_url_path='')
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))
    # Keep non-ASCII catalog names readable in responses
    flask_app.json.ensure_ascii = False

    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Each app owns its own state; handlers reach it through get_store()
    store = GameStateStore.from_config(flask_app.config, logger=flask_app.logger)
    store.init_app(flask_app)

    from casa.main import main
    flask_app.register_blueprint(main)

    from casa.api.game import api
    flask_app.register_blueprint(api, url_prefix='/api')

    @click.command('state-reset')
    def state_reset_command():
        """Discards the saved game and starts from the seed."""
        store.reset()
        click.echo('Game state has been reset and seeded!')

    @click.command('state-show')
    def state_show_command():
        """Prints a summary of the current game."""
        with store.lock:
            state = store.state
            click.echo(f"Points: {state.points}")
            click.echo(f"Theme: {state.theme}")
            if state.timer.is_running:
                left = remaining_seconds(state.timer)
                click.echo(f"Timer: running {state.timer.duration_seconds}s, {left:.0f}s left")
            elif state.timer.cancelled:
                click.echo('Timer: cancelled')
            else:
                click.echo('Timer: idle')
            for slot in state.house.slots:
                item = state.find_item(state.house.placed.get(slot, ''))
                click.echo(f"  {slot}: {item.name if item else '-'}")
            click.echo(f"Achievements: {', '.join(state.achievements) or '-'}")

    @click.command('catalog')
    @click.option('--slot', default=None, help='Only list items for this slot.')
    def catalog_command(slot):
        """Lists the purchasable items."""
        with store.lock:
            items = [i for i in store.state.catalog if slot is None or i.slot == slot]
        for item in items:
            click.echo(f"{item.id}: {item}")

    @click.command('export-seed')
    @click.option('--output', default=None, help='Target file, defaults to static/seed.json.')
    def export_seed_command(output):
        """Writes the seed used by the browser when the server is unreachable."""
        target = output or os.path.join(flask_app.static_folder, 'seed.json')
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(seed_document(), f, ensure_ascii=False, indent=2)
            f.write('\n')
        click.echo(f"Seed written to {target}")

    flask_app.cli.add_command(state_reset_command)
    flask_app.cli.add_command(state_show_command)
    flask_app.cli.add_command(catalog_command)
    flask_app.cli.add_command(export_seed_command)

    return flask_app
