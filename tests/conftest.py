import random
from datetime import datetime, timezone

import pytest

from uniwise_cbt.models.question_model import Course, Question
from uniwise_cbt.models.session_state import UserContext
from uniwise_cbt.services.notifier import ToastQueue
from uniwise_cbt.services.session_manager import ExamContext, ExamSettings, SessionManager


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


def make_pool(n: int, course_id: str = "course-x", answer: str = "a") -> list[Question]:
    return [
        Question(
            id=f"q-{course_id}-{i}",
            course_id=course_id,
            year="2024",
            content=f"Sample question {i}",
            options={"a": "A", "b": "B", "c": "C", "d": "D"},
            answer=answer,
        )
        for i in range(1, n + 1)
    ]


COURSE = Course(id="course-x", code="GSS999", title="Test Course")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_manager(clock):
    def _make(subscribed=True, seed=42, **settings):
        context = ExamContext(
            user=UserContext(id="user-1", name="Ada", is_subscribed=subscribed),
            settings=ExamSettings(**settings),
            rng=random.Random(seed),
            clock=clock,
            now=lambda: datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc),
            notifier=ToastQueue(),
        )
        return SessionManager(context)
    return _make


@pytest.fixture
def manager(make_manager):
    return make_manager()
