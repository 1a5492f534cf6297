import logging

from buzzer import create_app, socketio

logging.basicConfig(level=logging.INFO)
app = create_app()

if __name__ == '__main__':
    host = app.config['HOST']
    port = app.config['PORT']
    app.logger.info(f"Fastest Finger server running on http://{host}:{port}")
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True)
