"""
services/session_manager.py

Timed practice session lifecycle: start -> answer -> submit.

    active --[submit | timer expiry]--> completed

A SessionManager belongs to one client context and holds at most one live
session. Starting a new session discards the previous one and its timer.
Everything it needs (user, settings, randomness, clocks, notification sink)
comes in through ExamContext.
"""

import logging
import random
import time
import uuid
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from uniwise_cbt.errors import (
    DailyLimitError,
    EmptyPoolError,
    InvalidOptionError,
    InvalidStateError,
    UnknownQuestionError,
)
from uniwise_cbt.models.question_model import Course, Question
from uniwise_cbt.models.session_state import CBTSession, UserContext
from uniwise_cbt.services.exam_service import score_session
from uniwise_cbt.services.notifier import ToastQueue
from uniwise_cbt.services.timer import EXAM_DURATION_SECONDS, ExamTimer

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 20
FREE_DAILY_EXAM_LIMIT = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def sample_questions(
    pool: Sequence[Question],
    k: int,
    rng: random.Random,
) -> List[Question]:
    """
    Draw min(k, len(pool)) distinct questions uniformly without replacement.

    Deterministic for a seeded rng.
    """
    if k < 0:
        raise ValueError("sample size must be non-negative")
    return rng.sample(list(pool), min(k, len(pool)))


class ExamSettings(BaseModel):
    duration_seconds: int = Field(default=EXAM_DURATION_SECONDS, gt=0)
    sample_size: int = Field(default=DEFAULT_SAMPLE_SIZE, gt=0)
    free_daily_limit: Optional[int] = Field(
        default=FREE_DAILY_EXAM_LIMIT,
        ge=0,
        description="Exams per day for unsubscribed users. None = unlimited"
    )
    validate_option_keys: bool = Field(
        default=False,
        description="Reject option keys that are not on the question"
    )


class ExamContext(BaseModel):
    """Explicit dependencies of a SessionManager."""

    user: UserContext
    settings: ExamSettings = Field(default_factory=ExamSettings)
    rng: random.Random = Field(default_factory=random.Random)
    clock: Callable[[], float] = time.monotonic
    now: Callable[[], datetime] = _utcnow
    notifier: ToastQueue = Field(default_factory=ToastQueue)

    model_config = {"arbitrary_types_allowed": True}


class SessionManager:

    def __init__(self, context: ExamContext, attempts: Optional[Dict[date, int]] = None) -> None:
        """
        Args:
            context:  Explicit dependencies.
            attempts: Exams started per day. Pass the previous manager's
                      counter to keep the free-plan limit across managers
                      of the same user.
        """
        self.context = context
        self.session: Optional[CBTSession] = None
        self.timer: Optional[ExamTimer] = None
        self.attempts: Dict[date, int] = {} if attempts is None else attempts

    # ── lifecycle ────────────────────────────────────────────────────────────

    def start(
        self,
        pool: Sequence[Question],
        course: Optional[Course] = None,
        sample_size: Optional[int] = None,
    ) -> CBTSession:
        """
        Start a new session from a question pool.

        Args:
            pool:        Full question pool of the course.
            course:      Course metadata for the session header.
            sample_size: Questions to draw (default: settings.sample_size).

        Raises:
            EmptyPoolError:  The pool has no questions.
            DailyLimitError: Free-plan user already used today's exams.
        """
        settings = self.context.settings
        user = self.context.user
        course_label = course.display_name if course else "this course"

        if not pool:
            self._notify("No questions available",
                         f"There are no questions for {course_label} yet.", "destructive")
            raise EmptyPoolError(f"no questions available for {course_label}")

        today = self.context.now().date()
        limit = settings.free_daily_limit
        if not user.is_subscribed and limit is not None and self.attempts.get(today, 0) >= limit:
            self._notify("Daily limit reached",
                         f"Free plan allows {limit} CBT exams per day. Upgrade to Premium for unlimited practice.",
                         "destructive")
            raise DailyLimitError(limit)

        k = settings.sample_size if sample_size is None else sample_size
        if k < 1:
            raise ValueError("sample size must be at least 1")

        self.discard()

        questions = sample_questions(pool, k, self.context.rng)
        started_at = self.context.now()
        session = CBTSession(
            id=f"cbt-{int(started_at.timestamp() * 1000)}-{uuid.uuid4().hex[:6]}",
            user_id=user.id,
            course_id=course.id if course else questions[0].course_id,
            course_name=course.display_name if course else "",
            questions=questions,
            start_time=started_at,
        )

        timer = ExamTimer(
            on_expire=lambda: self._on_timer_expired(session),
            duration=settings.duration_seconds,
            clock=self.context.clock,
        )
        timer.start()

        self.session = session
        self.timer = timer
        self.attempts[today] = self.attempts.get(today, 0) + 1
        logger.info(
            f"Session {session.id} started for user {user.id}: "
            f"{len(questions)}/{len(pool)} questions, {settings.duration_seconds}s"
        )
        return session

    def select_answer(self, session: CBTSession, question_id: str, option_key: str) -> CBTSession:
        """
        Record (or overwrite) the answer for one question.

        An empty option_key clears the answer.

        Raises:
            InvalidStateError:    Session already completed, or discarded by a later start().
            UnknownQuestionError: question_id is not in the sampled set.
            InvalidOptionError:   Only with settings.validate_option_keys.
        """
        self._poll_timer(session)
        self._ensure_active(session)

        question = next((q for q in session.questions if q.id == question_id), None)
        if question is None:
            logger.error(f"Session {session.id}: answer for unknown question {question_id!r}")
            raise UnknownQuestionError(question_id)

        if not option_key:
            session.answers.pop(question_id, None)
            return session

        if self.context.settings.validate_option_keys and option_key not in question.options:
            raise InvalidOptionError(f"option {option_key!r} is not valid for question {question_id!r}")

        session.answers[question_id] = option_key
        return session

    def navigate(self, session: CBTSession, index: int) -> CBTSession:
        """Move the cursor, clamped to the question range."""
        self._poll_timer(session)
        self._ensure_active(session)
        session.current_index = max(0, min(index, len(session.questions) - 1))
        return session

    def submit(self, session: CBTSession, forced: bool = False) -> CBTSession:
        """
        Finalize and score the session.

        Args:
            forced: True when triggered by timer expiry.

        Raises:
            InvalidStateError: Session already completed (the first score stays) or discarded.
        """
        if not forced:
            self._poll_timer(session)
        self._ensure_active(session)

        timer = self._timer_for(session)
        if timer is not None:
            timer.stop()

        report = score_session(session)
        session.completed = True
        session.forced = forced
        session.end_time = self.context.now()
        session.score = report.percentage

        logger.info(
            f"Session {session.id} submitted ({'forced' if forced else 'manual'}): "
            f"{report.correct_count}/{report.total} correct, {report.percentage:.2f}%"
        )
        self._notify(
            "Time's up!" if forced else "Exam submitted",
            f"You scored {report.percentage:.0f}% ({report.correct_count}/{report.total} correct).",
        )
        return session

    def discard(self) -> None:
        """Drop the current session and stop its timer."""
        if self.timer is not None:
            self.timer.stop()
        if self.session is not None and not self.session.completed:
            logger.info(f"Session {self.session.id} discarded before submission")
        self.session = None
        self.timer = None

    # ── timer ────────────────────────────────────────────────────────────────

    def check_timer(self) -> bool:
        """Force-submit the current session if its deadline has passed."""
        if self.timer is None:
            return False
        return self.timer.check()

    def remaining_seconds(self, session: CBTSession) -> int:
        timer = self._timer_for(session)
        if timer is not None:
            return timer.remaining
        return 0 if session.completed else self.context.settings.duration_seconds

    def attempts_today(self) -> int:
        return self.attempts.get(self.context.now().date(), 0)

    # ── internals ────────────────────────────────────────────────────────────

    def _timer_for(self, session: CBTSession) -> Optional[ExamTimer]:
        if self.session is not None and self.session.id == session.id:
            return self.timer
        return None

    def _poll_timer(self, session: CBTSession) -> None:
        timer = self._timer_for(session)
        if timer is not None:
            timer.check()

    def _on_timer_expired(self, session: CBTSession) -> None:
        try:
            self.submit(session, forced=True)
        except InvalidStateError:
            logger.info(f"Session {session.id}: expiry ignored, already submitted")

    def _ensure_active(self, session: CBTSession) -> None:
        if session.completed:
            raise InvalidStateError(f"session {session.id} is already submitted")
        if self._timer_for(session) is None:
            raise InvalidStateError(f"session {session.id} was discarded")

    def _notify(self, title: str, description: str, variant: str = "default") -> None:
        self.context.notifier.notify(title, description, variant)
