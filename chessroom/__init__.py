from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config, scheduler=None):
    """Build the Flask app and the single game session it hosts.

    `scheduler` drives the clock tick; by default ticks run as Socket.IO
    background tasks. Tests pass a manual scheduler instead.
    """
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')

    db.init_app(flask_app)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One game per process: built once here and handed to every handler
    from chessroom.services.games import (
        GameSession,
        SessionCoordinator,
        SocketIOBroadcaster,
        SocketIOScheduler,
    )
    session = GameSession.new(
        clock_seconds=int(flask_app.config.get('CLOCK_SECONDS', 600)),
        start_fen=flask_app.config.get('START_FEN'),
    )
    coordinator = SessionCoordinator(
        session,
        SocketIOBroadcaster(socketio, session.registry, namespace=namespace, logger=flask_app.logger),
        scheduler or SocketIOScheduler(socketio, logger=flask_app.logger),
        tick_interval=float(flask_app.config.get('TICK_INTERVAL_SEC', 1)),
        logger=flask_app.logger,
    )
    flask_app.extensions['chessroom'] = coordinator

    from chessroom.main import main
    flask_app.register_blueprint(main)

    from chessroom.api.game import game_api
    flask_app.register_blueprint(game_api, url_prefix='/api')

    from chessroom.socketio_events import register_socketio_handlers
    register_socketio_handlers(coordinator, namespace=namespace)

    with flask_app.app_context():
        import chessroom.models  # noqa: F401
        db.create_all()

    @click.command('chat-reset')
    def chat_reset_command():
        """Drops and recreates the chat log tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Chat log has been reset!')

    flask_app.cli.add_command(chat_reset_command)

    flask_app.logger.info(
        f"[startup] namespace={namespace} clock={session.clock.first}s position={session.engine.current_position()}"
    )
    return flask_app


def get_coordinator():
    from flask import current_app
    return current_app.extensions['chessroom']
