from flask import Blueprint, Response, current_app, jsonify, request

from buzzer.errors import BuzzerError, NotFound
from buzzer.services.export import csv_filename, render_csv


sessions = Blueprint('sessions', __name__)


def _engine():
    return current_app.extensions['buzzer']


@sessions.errorhandler(BuzzerError)
def handle_buzzer_error(exc: BuzzerError):
    return jsonify(exc.to_dict()), exc.status_code


@sessions.route('', methods=['POST'])
def create_session():
    data = request.get_json(silent=True) or {}
    sid = str(data.get('sid') or '')
    _engine().create(sid)
    return jsonify({'sid': sid}), 201


@sessions.route('/<sid>', methods=['GET'])
def get_session(sid):
    return jsonify(_engine().snapshot(sid))


@sessions.route('/<sid>/join', methods=['POST'])
def join_session(sid):
    data = request.get_json(silent=True) or {}
    _engine().join(sid, data.get('name') or '')
    return jsonify({'ok': True})


@sessions.route('/<sid>/submissions.csv', methods=['GET'])
def export_submissions(sid):
    try:
        leaderboard = _engine().leaderboard(sid)
    except NotFound:
        return Response('Session not found', status=404, mimetype='text/plain')
    return Response(
        render_csv(leaderboard),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{csv_filename(sid)}"'},
    )
