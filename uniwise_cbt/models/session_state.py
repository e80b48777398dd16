"""
models/session_state.py

State of one timed practice exam (the OMR card).
Pydantic BaseModel: serializable, type checked, no UI code.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from uniwise_cbt.models.question_model import Question


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserContext(BaseModel):
    """Current user as supplied by the identity provider."""

    id: str = Field(..., min_length=1)
    name: str = "Guest"
    is_subscribed: bool = False


class CBTSession(BaseModel):
    """
    One user's attempt at a sampled set of questions.

    Attributes:
        id:            Session id, ``cbt-<epoch ms>-<hex>``.
        user_id:       Owner (read from the UserContext at start).
        course_id:     Course the questions were drawn from.
        course_name:   ``"{code}: {title}"`` display name.
        questions:     Sampled questions. Fixed once the session starts.
        answers:       {question.id: selected option key}. One entry per question.
        current_index: Navigation cursor (0-based).
        completed:     True once submitted, manually or by the timer.
        forced:        True when the timer finalized the session.
        score:         Percentage, only set once completed.
        start_time:    UTC start time.
        end_time:      UTC submit time.
    """

    id: str
    user_id: str
    course_id: str
    course_name: str = ""
    questions: List[Question] = Field(default_factory=list)
    answers: Dict[str, str] = Field(
        default_factory=dict,
        description="key: question.id, value: selected option key"
    )
    current_index: int = Field(default=0, ge=0)
    completed: bool = False
    forced: bool = False
    score: Optional[float] = None
    start_time: datetime = Field(default_factory=_utcnow)
    end_time: Optional[datetime] = None

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def unanswered_count(self) -> int:
        return len(self.questions) - len(self.answers)
