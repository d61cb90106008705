"""Error taxonomy shared by services and routers."""


class QuizError(Exception):
    """Base class for errors surfaced to the API caller."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class PersistenceError(QuizError):
    """The underlying storage call failed."""

    status_code = 503


class NotFoundError(QuizError):
    """Requested attempt does not exist or belongs to someone else."""

    status_code = 404


class AlreadyFinishedError(QuizError):
    """Attempt already has a final score."""

    status_code = 409


class ValidationError(QuizError):
    """Malformed input, rejected before any persistence call."""

    status_code = 422
