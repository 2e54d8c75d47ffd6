import os
import sys

import pytest

# Ensure the backend root (containing the `quizroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from quizroom.game.engine import GameEngine
from quizroom.game.registry import RoomRegistry
from quizroom.server import create_app


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    CORS_ORIGINS = '*'
    TRUST_PROXY_HEADERS = False
    SOCKETIO_ASYNC_MODE = 'threading'
    QUESTIONS_FILE = ''
    MAX_CREATE_ATTEMPTS = 10


class FakeClock:
    """Monotonic clock stand-in that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def engine(registry, clock):
    return GameEngine(registry, clock=clock)


@pytest.fixture()
def app_factory():
    """Build an app from TestConfig with some settings overridden."""

    def make(**overrides):
        config_class = type('OverriddenConfig', (TestConfig,), overrides)
        return create_app(config_class)

    return make


@pytest.fixture()
def app_and_socketio():
    return create_app(TestConfig)


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(app_and_socketio):
    application, socketio = app_and_socketio
    created = []

    def make():
        test_client = socketio.test_client(application, flask_test_client=application.test_client())
        created.append(test_client)
        return test_client

    yield make

    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
