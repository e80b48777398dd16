"""
services/exam_service.py

Exam scoring and result analysis.
Pure Python functions: no UI code, no global state changes.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from uniwise_cbt.models.question_model import Question
from uniwise_cbt.models.session_state import CBTSession


class ScoreReport(BaseModel):
    """Outcome of scoring one session."""

    percentage: float = Field(..., ge=0.0, le=100.0)
    correct: List[Question] = Field(default_factory=list)
    incorrect: List[Question] = Field(default_factory=list)
    unanswered: List[Question] = Field(
        default_factory=list,
        description="Questions with no answer (also counted in incorrect)"
    )

    @property
    def total(self) -> int:
        return len(self.correct) + len(self.incorrect)

    @property
    def correct_count(self) -> int:
        return len(self.correct)

    @property
    def incorrect_count(self) -> int:
        return len(self.incorrect)


def calculate_score(
    questions: List[Question],
    user_answers: Dict[str, str],
) -> float:
    """
    Score the answer sheet as a percentage.

    A question is correct when user_answers.get(question.id) == question.answer.
    Unanswered questions (no key) count as incorrect.

    Args:
        questions:    Questions to score.
        user_answers: Answer sheet. {question.id: selected option key}

    Returns:
        0.0 ~ 100.0, unrounded. 0.0 for an empty question list.
    """
    if not questions:
        return 0.0

    correct_count = sum(
        1
        for q in questions
        if user_answers.get(q.id) == q.answer
    )

    return 100 * correct_count / len(questions)


def get_incorrect_questions(
    questions: List[Question],
    user_answers: Dict[str, str],
) -> List[Question]:
    """
    Incorrect questions, in the original order.

    Includes questions the user never answered.
    """
    return [q for q in questions if user_answers.get(q.id) != q.answer]


def score_session(session: CBTSession) -> ScoreReport:
    """
    Partition the session's questions into correct / incorrect and compute
    the percentage. Deterministic: depends only on questions and answers.
    """
    incorrect = get_incorrect_questions(session.questions, session.answers)
    wrong_ids = {q.id for q in incorrect}
    correct = [q for q in session.questions if q.id not in wrong_ids]
    unanswered = [q for q in incorrect if q.id not in session.answers]

    return ScoreReport(
        percentage=calculate_score(session.questions, session.answers),
        correct=correct,
        incorrect=incorrect,
        unanswered=unanswered,
    )


def score_message(percentage: float) -> str:
    """Feedback line shown with the final score."""
    if percentage >= 70:
        return "Excellent! You've mastered this subject."
    if percentage >= 50:
        return "Good job! You're on the right track."
    return "Keep practicing! You'll improve with more studying."


def is_passed(score: float, pass_score: float = 50.0) -> bool:
    """
    Pass / fail.

    Args:
        score:      Percentage from calculate_score() (0.0 ~ 100.0).
        pass_score: Pass mark (default 50.0).

    Returns:
        True if score >= pass_score.
    """
    return score >= pass_score


def format_time(seconds: float) -> str:
    """Remaining time as MM:SS."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
