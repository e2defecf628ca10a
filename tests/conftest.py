import os
import sys
import pytest

# Ensure the project root (containing the `chessroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from chessroom import create_app, db, socketio
from chessroom.services.games import Broadcaster, GameSession, SessionCoordinator
from chessroom.services.games.scheduler import ScheduledTask


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CLOCK_SECONDS = 600
    TICK_INTERVAL_SEC = 1
    START_FEN = None
    SOCKETIO_NAMESPACE = '/'
    CORS_ORIGINS = ['http://localhost:3000']
    CHAT_MAX_LENGTH = 50
    LOG_LEVEL = 'DEBUG'


class ManualScheduler:
    """Fires recurring callbacks only when the test advances time."""

    def __init__(self):
        self.tasks = []

    def every(self, interval, callback):
        task = ScheduledTask()
        self.tasks.append((task, callback))
        return task

    def advance(self, seconds=1):
        for _ in range(int(seconds)):
            for task, callback in list(self.tasks):
                if not task.cancelled:
                    callback()

    @property
    def live_tasks(self):
        return [task for task, _ in self.tasks if not task.cancelled]


class RecordingBroadcaster(Broadcaster):
    """Records every send; sids in `failing` raise like a dead transport."""

    def __init__(self, registry):
        super().__init__(registry)
        self.sent = []
        self.failing = set()

    def _emit(self, sid, event, payload):
        if sid in self.failing:
            raise ConnectionError(f'{sid} is gone')
        self.sent.append((sid, event, payload))

    def events(self, sid, name):
        return [payload for to, event, payload in self.sent if to == sid and event == name]

    def names(self, sid):
        return [event for to, event, _ in self.sent if to == sid]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def make_coordinator(scheduler):
    def _make(clock_seconds=600, fen=None):
        session = GameSession.new(clock_seconds=clock_seconds, start_fen=fen)
        broadcaster = RecordingBroadcaster(session.registry)
        return SessionCoordinator(session, broadcaster, scheduler)
    return _make


@pytest.fixture()
def coordinator(make_coordinator):
    return make_coordinator()


@pytest.fixture()
def flask_app(scheduler):
    application = create_app(TestConfig, scheduler=scheduler)
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_clients(flask_app):
    """Factory for Socket.IO test clients; all are disconnected at teardown."""
    created = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield _connect
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


class FastTickConfig(TestConfig):
    CLOCK_SECONDS = 3
    TICK_INTERVAL_SEC = 0.05


@pytest.fixture()
def realtime_app():
    """App driven by the real Socket.IO background-task scheduler."""
    application = create_app(FastTickConfig)
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()
