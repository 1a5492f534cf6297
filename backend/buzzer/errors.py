"""Error taxonomy shared by the REST and real-time gateways.

Each error carries the HTTP status the REST layer answers with and the
message shown to the user. Socket handlers mostly swallow these as no-ops.
"""


class BuzzerError(Exception):
    status_code = 400
    message = 'Bad request.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.message}


class InvalidId(BuzzerError):
    status_code = 400
    message = 'Session ID must be exactly 4 digits (0000-9999).'


class InvalidName(BuzzerError):
    status_code = 400
    message = 'Name must be English letters only (A-Z/a-z) and up to 20 characters.'


class NotFound(BuzzerError):
    status_code = 404
    message = 'Session not found.'


class AlreadyExists(BuzzerError):
    status_code = 409
    message = 'Session ID already exists. Use a different 4-digit ID.'


class NameTaken(BuzzerError):
    status_code = 409
    message = 'This name is already taken in this session.'
