from flask import current_app, request

from buzzer import socketio
from buzzer.errors import BuzzerError


def _engine():
    return current_app.extensions['buzzer']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_join_session(data):
    data = data if isinstance(data, dict) else {}
    engine = _engine()
    try:
        engine.subscribe(data.get('sid'), _get_sid(), role=data.get('role'), name=data.get('name'))
    except BuzzerError:
        engine.hub.send(_get_sid(), 'error_message', 'Session not found.')


def handle_start_game(data):
    data = data if isinstance(data, dict) else {}
    _engine().start(data.get('sid'))


def handle_reset_game(data):
    data = data if isinstance(data, dict) else {}
    _engine().reset(data.get('sid'))


def handle_buzz(data):
    data = data if isinstance(data, dict) else {}
    _engine().buzz(data.get('sid'), data.get('name'), channel=_get_sid())


def handle_disconnect(*args):
    # Players stay joined; only the connection context goes away
    ctx = _engine().hub.forget(_get_sid())
    if ctx:
        current_app.logger.debug(f"[disconnect] sid={ctx['sid']} role={ctx['role']} name={ctx['name']}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the configured namespace."""
    socketio.on_event('join_session', handle_join_session, namespace=namespace)
    socketio.on_event('start_game', handle_start_game, namespace=namespace)
    socketio.on_event('reset_game', handle_reset_game, namespace=namespace)
    socketio.on_event('buzz', handle_buzz, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
