import os
import sys
import pytest

# Ensure the project root (containing the `arcade` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from arcade import create_app, db, socketio
from arcade.services.games import GameEngine, MemorySessionStore, default_games
from config import Config


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_RETENTION_DAYS = 7
    REVEAL_ANSWERS_ON_COMPLETE = True


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import arcade.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def engine(clock):
    return GameEngine(MemorySessionStore(), default_games(), clock=clock)


def cards_by_pair(session):
    """Card ids grouped by pair, read from the full (secret-bearing) session."""
    pairs = {}
    for card in session.content['cards']:
        pairs.setdefault(card['pairId'], []).append(card['id'])
    return [pairs[k] for k in sorted(pairs)]


def find_keys(node, names):
    """Every key from ``names`` found anywhere in a JSON-like structure."""
    found = set()
    if isinstance(node, dict):
        for key, value in node.items():
            if key in names:
                found.add(key)
            found |= find_keys(value, names)
    elif isinstance(node, list):
        for item in node:
            found |= find_keys(item, names)
    return found
