"""Domain services: progress reconciliation, score log and leaderboards.

Routes import from here so transport concerns stay out of the game rules.
Every service error carries the HTTP status the blueprints answer with.
"""

# Largest value the Integer columns (SQLite and PostgreSQL) hold
INT_MAX = 2 ** 31 - 1


class ArcadeError(Exception):
    status_code = 400
    message = 'Request could not be processed'

    def __init__(self, message=None, errors=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.errors = errors

    def to_dict(self):
        payload = {'success': False, 'message': self.message}
        if self.errors:
            payload['errors'] = self.errors
        return payload


class ValidationError(ArcadeError):
    status_code = 422
    message = 'Validation failed'


class InvalidDifficulty(ArcadeError):
    message = 'Invalid difficulty level'


class InvalidWindow(ArcadeError):
    message = 'Invalid leaderboard window'


class ScoreNotFound(ArcadeError):
    status_code = 404
    message = 'Score not found'


class ScoreOwnershipError(ArcadeError):
    status_code = 403
    message = 'Unauthorized'
