"""Domain errors raised by the session engine.

Every error carries a ``kind`` discriminator and the HTTP status the web
layer should answer with, so callers never have to match on message text.
"""


class GameError(Exception):
    kind = 'error'
    status_code = 500
    default_message = 'Game error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.message, 'kind': self.kind}


class InvalidConfig(GameError):
    kind = 'invalid_config'
    status_code = 400
    default_message = 'Invalid game configuration'


class InvalidAction(GameError):
    kind = 'invalid_action'
    status_code = 400
    default_message = 'Invalid action'


class GameNotFound(GameError):
    kind = 'game_not_found'
    status_code = 404
    default_message = 'Game not found'


class SessionNotFound(GameError):
    kind = 'session_not_found'
    status_code = 404
    default_message = 'Session not found'


class SessionAlreadyCompleted(GameError):
    kind = 'session_completed'
    status_code = 400
    default_message = 'Session already completed'


class StoreError(GameError):
    """The session store failed; distinct from the client-facing errors above."""
    kind = 'store_error'
    status_code = 500
    default_message = 'Session store failure'


class StoreConflict(StoreError):
    """A concurrent writer replaced the session first."""
    kind = 'store_conflict'
    status_code = 409
    default_message = 'Session was modified concurrently'
