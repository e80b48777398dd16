"""
api/routes.py — FastAPI endpoints
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

import api.session as session
import config
from uniwise_cbt.errors import (
    DailyLimitError,
    EmptyPoolError,
    InvalidOptionError,
    InvalidStateError,
    UnknownQuestionError,
)
from uniwise_cbt.models.question_model import Question
from uniwise_cbt.models.session_state import CBTSession, UserContext
from uniwise_cbt.services.exam_service import (
    format_time, is_passed, score_message, score_session,
)
from uniwise_cbt.services.question_bank import QuestionBank
from uniwise_cbt.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class UserBody(BaseModel):
    name: str = Field(..., min_length=1)
    is_subscribed: bool = False

class StartExamBody(BaseModel):
    course_id: str = ""

class SaveAnswerBody(BaseModel):
    question_id: str
    answer: str = ""

class NavigateBody(BaseModel):
    index: int = 0


# ── helpers ──────────────────────────────────────────────────────────────────

def _state(request: Request) -> dict[str, Any]:
    state = session.get_session(request.state.session_id)
    if state is None:
        raise HTTPException(status_code=401, detail="Session expired. Please reload.")
    return state


def _manager(request: Request) -> SessionManager:
    """Client's SessionManager, with any overdue exam already force-submitted."""
    manager: SessionManager = _state(request)["manager"]
    manager.check_timer()
    return manager


def _bank(request: Request) -> QuestionBank:
    return request.app.state.question_bank


def _current(manager: SessionManager) -> CBTSession:
    if manager.session is None:
        raise HTTPException(status_code=404, detail="No exam in progress.")
    return manager.session


def _question_to_dict(q: Question, reveal: bool) -> dict:
    return q.model_dump() if reveal else q.public_dict()


def _already_submitted(manager: SessionManager, exc: InvalidStateError) -> HTTPException:
    logger.info(f"Ignored action on completed session: {exc}")
    manager.context.notifier.notify("Exam already submitted", "Start a new exam to try again.")
    return HTTPException(status_code=400, detail="Exam already submitted.")


# ── endpoints ────────────────────────────────────────────────────────────────

@router.get("/api/health")
async def health():
    return {"ok": True}


@router.get("/api/user")
async def get_user(request: Request):
    state = _state(request)
    user: UserContext = state["user"]
    return {**user.model_dump(), "exams_today": state["manager"].attempts_today()}


@router.put("/api/user")
async def set_user(request: Request, body: UserBody):
    sid = request.state.session_id
    current: UserContext = _state(request)["user"]
    user = UserContext(id=current.id, name=body.name.strip(), is_subscribed=body.is_subscribed)
    session.set_user(sid, user)
    return user.model_dump()


@router.get("/api/courses")
async def list_courses(request: Request):
    courses = _bank(request).list_courses(code_prefix=config.CBT_COURSE_PREFIX)
    return [{**c.model_dump(), "display_name": c.display_name} for c in courses]


@router.post("/api/start-exam")
async def start_exam(request: Request, body: StartExamBody):
    manager = _manager(request)
    notifier = manager.context.notifier

    if not body.course_id:
        notifier.notify("Course Required", "Please select a course to start the CBT", "destructive")
        raise HTTPException(status_code=400, detail="Please select a course to start the CBT.")

    bank = _bank(request)
    course = bank.get_course(body.course_id)
    if course is None or not course.code.startswith(config.CBT_COURSE_PREFIX):
        raise HTTPException(status_code=404, detail="Course not found.")

    try:
        cbt = manager.start(bank.get_questions(course.id), course=course)
    except EmptyPoolError:
        raise HTTPException(status_code=400, detail=f"No questions available for {course.display_name}.")
    except DailyLimitError as e:
        raise HTTPException(status_code=429, detail=f"Free plan limit reached ({e.limit} exams per day).")

    manager.timer.arm()
    return {
        "id": cbt.id,
        "course_name": cbt.course_name,
        "total": len(cbt.questions),
        "duration": manager.context.settings.duration_seconds,
        "ok": True,
    }


@router.get("/api/exam-state")
async def get_exam_state(request: Request):
    manager = _manager(request)
    cbt = _current(manager)
    remaining = manager.remaining_seconds(cbt)
    return {
        "id": cbt.id,
        "course_name": cbt.course_name,
        "current_index": cbt.current_index,
        "answers": cbt.answers,
        "completed": cbt.completed,
        "forced": cbt.forced,
        "start_time": cbt.start_time.isoformat(),
        "remaining_seconds": remaining,
        "time_display": format_time(remaining),
        "time_warning": not cbt.completed and remaining < config.TIME_WARNING_SECONDS,
        "total": len(cbt.questions),
        "answered_count": cbt.answered_count,
        "unanswered_count": cbt.unanswered_count,
        "question_ids": cbt.question_ids,
    }


@router.get("/api/question/{index}")
async def get_question(request: Request, index: int):
    manager = _manager(request)
    cbt = _current(manager)
    if not (0 <= index < len(cbt.questions)):
        raise HTTPException(status_code=404, detail="Question not found.")

    q = cbt.questions[index]
    d = _question_to_dict(q, reveal=cbt.completed)
    d.update({"saved_answer": cbt.answers.get(q.id, ""), "index": index, "total": len(cbt.questions)})
    return d


@router.post("/api/save-answer")
async def save_answer(request: Request, body: SaveAnswerBody):
    manager = _manager(request)
    cbt = _current(manager)
    try:
        manager.select_answer(cbt, body.question_id, body.answer)
    except InvalidStateError as e:
        raise _already_submitted(manager, e)
    except UnknownQuestionError as e:
        logger.error(f"save-answer rejected: {e}")
        raise HTTPException(status_code=422, detail="Question is not part of this exam.")
    except InvalidOptionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"ok": True, "answered_count": cbt.answered_count}


@router.post("/api/navigate")
async def navigate(request: Request, body: NavigateBody):
    manager = _manager(request)
    cbt = _current(manager)
    try:
        manager.navigate(cbt, body.index)
    except InvalidStateError as e:
        raise _already_submitted(manager, e)
    return {"index": cbt.current_index, "ok": True}


@router.post("/api/submit-exam")
async def submit_exam(request: Request):
    manager = _manager(request)
    cbt = _current(manager)
    try:
        manager.submit(cbt)
    except InvalidStateError as e:
        raise _already_submitted(manager, e)
    return {"score": cbt.score, "ok": True}


@router.get("/api/results")
async def get_results(request: Request):
    manager = _manager(request)
    cbt = _current(manager)
    if not cbt.completed:
        raise HTTPException(status_code=400, detail="Exam has not been submitted yet.")

    report = score_session(cbt)

    def _with_user_answer(q: Question) -> dict:
        d = _question_to_dict(q, reveal=True)
        d["user_answer"] = cbt.answers.get(q.id, "")
        return d

    return {
        "score": cbt.score,
        "message": score_message(cbt.score),
        "passed": is_passed(cbt.score),
        "forced": cbt.forced,
        "total": report.total,
        "correct_count": report.correct_count,
        "incorrect_count": report.incorrect_count,
        "unanswered_count": len(report.unanswered),
        "correct_questions": [_with_user_answer(q) for q in report.correct],
        "incorrect_questions": [_with_user_answer(q) for q in report.incorrect],
        "start_time": cbt.start_time.isoformat(),
        "end_time": cbt.end_time.isoformat() if cbt.end_time else None,
    }


@router.get("/api/notifications")
async def get_notifications(request: Request):
    manager = _manager(request)
    return [n.model_dump(mode="json") for n in manager.context.notifier.drain()]


@router.post("/api/reset")
async def reset_session(request: Request):
    session.reset(request.state.session_id)
    return {"ok": True}
