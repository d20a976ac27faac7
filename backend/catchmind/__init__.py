from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


class GameState:
    """Per-application game collaborators, kept on ``app.extensions``."""

    def __init__(self, registry, scheduler, words, backplane_url=None):
        self.registry = registry
        self.scheduler = scheduler
        self.words = words
        self.backplane_url = backplane_url


def get_game_state() -> GameState:
    return current_app.extensions['catchmind']


def create_app(config_class=Config):
    from catchmind.backplane import resolve_message_queue
    from catchmind.registry import RoomRegistry
    from catchmind.services.scheduler import RoundScheduler, run_room_reaper
    from catchmind.services.words import WordProvider

    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')

    CORS(flask_app, origins=allowed_origins)

    # Socket.IO with the Redis message queue when one is reachable
    message_queue = resolve_message_queue(flask_app)
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        message_queue=message_queue,
        channel=flask_app.config.get('BACKPLANE_CHANNEL', 'catchmind'),
    )

    registry = RoomRegistry()
    scheduler = RoundScheduler(flask_app, socketio)
    words = WordProvider(flask_app.config.get('WORD_LIST'))
    flask_app.extensions['catchmind'] = GameState(registry, scheduler, words, message_queue)

    from catchmind.main import main
    flask_app.register_blueprint(main)

    from catchmind.socketio_events import register_socketio_handlers
    register_socketio_handlers(flask_app.config.get('SOCKETIO_NAMESPACE', '/game'))

    if flask_app.config.get('ROOM_IDLE_TTL_SEC', 0) > 0 and not flask_app.config.get('TESTING'):
        socketio.start_background_task(run_room_reaper, flask_app, socketio, registry, scheduler)

    return flask_app
