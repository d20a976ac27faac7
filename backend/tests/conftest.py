import os
import sys
import time
import pytest

# Ensure the backend root (containing the `catchmind` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from catchmind import create_app, socketio

NAMESPACE = '/game'
SECRET = 'Apple '


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    REDIS_URL = None
    BACKPLANE_CHANNEL = 'catchmind-test'
    SOCKETIO_NAMESPACE = NAMESPACE
    CORS_ORIGINS = '*'
    ROUND_ADVANCE_DELAY_SEC = 0
    WORD_LIST = [SECRET]
    FORFEIT_PRESENTER_ON_DISCONNECT = False
    ROOM_IDLE_TTL_SEC = 0
    ROOM_REAP_INTERVAL_SEC = 60


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def state(flask_app):
    return flask_app.extensions['catchmind']


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients on the game namespace."""
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass


def events(test_client, name=None):
    """Drain received packets, optionally keeping only ``name``."""
    received = test_client.get_received(NAMESPACE)
    if name is None:
        return received
    return [pkt['args'][0] if pkt['args'] else None for pkt in received if pkt['name'] == name]


def join(test_client, room_id, user_name):
    """Join a room and return the snapshot the server sent back."""
    test_client.emit('joinGame', {'roomId': room_id, 'userName': user_name}, namespace=NAMESPACE)
    received = test_client.get_received(NAMESPACE)
    snapshots = [pkt['args'][0] for pkt in received if pkt['name'] == 'initialState']
    assert snapshots, received
    return snapshots[-1], received


def collect_until(test_client, name, timeout=3.0):
    """Gather packets until ``name`` arrives or ``timeout`` passes."""
    collected = []
    deadline = time.time() + timeout
    while time.time() < deadline:
        collected.extend(test_client.get_received(NAMESPACE))
        if any(pkt['name'] == name for pkt in collected):
            break
        time.sleep(0.05)
    return collected
