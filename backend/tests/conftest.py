import os
import sys
import pytest

# Ensure the backend root (containing the `buzzer` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from buzzer import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    AUTO_CREATE_SESSIONS = False


class AutoCreateConfig(TestConfig):
    AUTO_CREATE_SESSIONS = True


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def engine(flask_app):
    return flask_app.extensions['buzzer']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client(), namespace='/')
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()


class RecordingHub:
    """Stand-in for BroadcastHub that keeps every emit in memory."""

    def __init__(self):
        self.published = []
        self.sent = []
        self.subscribers = {}

    def subscribe(self, sid, channel, role=None, name=None):
        self.subscribers[channel] = {'sid': sid, 'role': role or 'player', 'name': name}

    def publish(self, sid, event, payload=None):
        self.published.append((sid, event, payload))

    def send(self, channel, event, payload=None):
        self.sent.append((channel, event, payload))

    def events(self, sid=None):
        return [event for s, event, _ in self.published if sid is None or s == sid]


@pytest.fixture()
def hub():
    return RecordingHub()


@pytest.fixture()
def clock():
    class FixedClock:
        def __init__(self):
            self.now = 1_700_000_000_000

        def __call__(self):
            return self.now

    return FixedClock()


@pytest.fixture()
def store():
    from buzzer.services.store import SessionStore
    return SessionStore()


@pytest.fixture()
def bare_engine(store, hub, clock):
    from buzzer.services.engine import SessionEngine
    return SessionEngine(store=store, hub=hub, clock=clock)


@pytest.fixture()
def auto_create_app():
    application = create_app(AutoCreateConfig)
    with application.app_context():
        yield application
