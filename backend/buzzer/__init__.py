from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(raw):
    if isinstance(raw, (list, tuple)):
        return list(raw)
    origins = [o.strip() for o in (raw or '*').split(',') if o.strip()]
    return '*' if origins in ([], ['*']) else origins


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS'))
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One store per process, reachable from gateways via current_app
    from buzzer.services.store import SessionStore
    from buzzer.services.hub import BroadcastHub
    from buzzer.services.engine import SessionEngine
    flask_app.extensions['buzzer'] = SessionEngine(
        store=SessionStore(),
        hub=BroadcastHub(socketio, namespace=namespace),
        logger=flask_app.logger,
        auto_create=bool(flask_app.config.get('AUTO_CREATE_SESSIONS', False)),
    )

    from buzzer.main import main
    flask_app.register_blueprint(main)

    from buzzer.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/session')

    # Register Socket.IO event handlers on the initialized socketio instance
    from buzzer.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
