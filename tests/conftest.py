import os
import sys
from collections import defaultdict

import pytest

# Ensure the project root (containing the `hexdle` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from hexdle import create_app, db, socketio
from hexdle.services.rooms import MatchCoordinator, RoomRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:3000']
    RECORD_MATCHES = True
    MATCH_HISTORY_LIMIT = 20
    LOG_LEVEL = 'DEBUG'
    PORT = 3000


class RecordingNotifier:
    """Stands in for Socket.IO: resolves recipients at send time."""

    def __init__(self):
        self.channels = defaultdict(set)
        self.inbox = defaultdict(list)
        self.closed = []

    def send(self, event, data, to, skip=None):
        recipients = set(self.channels[to]) if to in self.channels else {to}
        recipients.discard(skip)
        for sid in recipients:
            self.inbox[sid].append((event, data))

    def enter(self, sid, channel):
        self.channels[channel].add(sid)

    def close(self, channel):
        self.closed.append(channel)
        self.channels.pop(channel, None)

    def events(self, sid, name):
        return [data for event, data in self.inbox[sid] if event == name]

    def names(self, sid):
        return [event for event, _ in self.inbox[sid]]

    def flush(self):
        self.inbox.clear()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def local_coordinator(notifier):
    """A coordinator with no Flask or Socket.IO behind it, and fixed colors."""
    colors = iter(['a1b2c3', 'd4e5f6', '0f0f0f', 'ffffff'])
    return MatchCoordinator(RoomRegistry(color_factory=lambda: next(colors)), notifier)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        import hexdle.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def coordinator(flask_app):
    return flask_app.extensions['match_coordinator']


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except RuntimeError:
            pass
