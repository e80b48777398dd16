"""
api/session.py — multi-user in-memory client contexts (cookie based)

Each browser gets a UUID session id and its own state: mock identity, toast
queue and a SessionManager holding the current exam.
Contexts expire after SESSION_TTL seconds without access.
"""

import random
import threading
import time
import uuid
from typing import Any

import config
from uniwise_cbt.models.session_state import UserContext
from uniwise_cbt.services.notifier import ToastQueue
from uniwise_cbt.services.session_manager import ExamContext, ExamSettings, SessionManager

_lock = threading.Lock()
_sessions: dict[str, dict[str, Any]] = {}
_timestamps: dict[str, float] = {}

SESSION_TTL = config.SESSION_TTL


def exam_settings() -> ExamSettings:
    return ExamSettings(
        duration_seconds=config.EXAM_DURATION_SECONDS,
        sample_size=config.SAMPLE_SIZE,
        free_daily_limit=config.FREE_DAILY_EXAM_LIMIT,
        validate_option_keys=config.VALIDATE_OPTION_KEYS,
    )


def _new_state(
    sid: str,
    user: UserContext | None = None,
    attempts: dict | None = None,
) -> dict[str, Any]:
    if user is None:
        user = UserContext(id=f"guest-{sid[:8]}")
    notifier = ToastQueue()
    context = ExamContext(
        user=user,
        settings=exam_settings(),
        rng=random.Random(config.RANDOM_SEED),
        notifier=notifier,
    )
    return {
        "user": user,
        "manager": SessionManager(context, attempts=attempts),
    }


def create_session() -> str:
    """Create a new client context and return its id."""
    sid = uuid.uuid4().hex
    with _lock:
        _sessions[sid] = _new_state(sid)
        _timestamps[sid] = time.time()
    return sid


def get_session(sid: str) -> dict[str, Any] | None:
    """Client context by id. None if missing or expired."""
    with _lock:
        if sid not in _sessions:
            return None
        if time.time() - _timestamps[sid] > SESSION_TTL:
            _drop(sid)
            return None
        _timestamps[sid] = time.time()  # refresh on access
        return _sessions[sid]


def set_user(sid: str, user: UserContext) -> None:
    """
    Swap the identity. Drops the running exam, it belongs to the old user.
    The daily attempt count carries over while the user id stays the same.
    """
    with _lock:
        if sid in _sessions:
            old = _sessions[sid]
            old["manager"].discard()
            attempts = old["manager"].attempts if old["user"].id == user.id else None
            _sessions[sid] = _new_state(sid, user, attempts)
            _timestamps[sid] = time.time()


def reset(sid: str) -> None:
    """Discard the current exam (identity and daily attempt count are kept)."""
    with _lock:
        if sid in _sessions:
            _sessions[sid]["manager"].discard()
            _timestamps[sid] = time.time()


def cleanup_expired() -> int:
    """Remove expired contexts. Returns how many were removed."""
    now = time.time()
    removed = 0
    with _lock:
        expired = [sid for sid, ts in _timestamps.items() if now - ts > SESSION_TTL]
        for sid in expired:
            _drop(sid)
            removed += 1
    return removed


def _drop(sid: str) -> None:
    _sessions[sid]["manager"].discard()
    del _sessions[sid]
    del _timestamps[sid]
