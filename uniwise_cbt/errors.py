"""
errors.py — exam engine exceptions.

Services raise these; api/routes.py maps them to HTTP status codes.
"""


class CBTError(Exception):
    """Base class for exam engine errors."""


class EmptyPoolError(CBTError):
    """No questions are available for the requested course."""


class UnknownQuestionError(CBTError):
    """An answer was given for a question outside the sampled set."""

    def __init__(self, question_id: str):
        super().__init__(f"question '{question_id}' is not part of this session")
        self.question_id = question_id


class InvalidStateError(CBTError):
    """The session is already completed."""


class InvalidOptionError(CBTError):
    """The selected option key does not exist on the question."""


class DailyLimitError(CBTError):
    """Free-plan daily exam limit reached."""

    def __init__(self, limit: int):
        super().__init__(f"free plan allows {limit} exams per day")
        self.limit = limit
