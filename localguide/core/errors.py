"""Error kinds raised by the stores and services.

Endpoints translate them into ``HTTPException`` using ``status_code`` and
``message``; the message is short and safe to return to clients.
"""


class GuideError(Exception):
    status_code = 500
    default_message = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(GuideError):
    status_code = 400
    default_message = "invalid input"


class DuplicateId(GuideError):
    status_code = 400
    default_message = "id already exists"


class NotFound(GuideError):
    status_code = 404
    default_message = "not found"


class Forbidden(GuideError):
    status_code = 403
    default_message = "forbidden"


class AlreadyVoted(GuideError):
    status_code = 400
    default_message = "already voted"


class PersistenceFailure(GuideError):
    status_code = 500
    default_message = "storage error"
