"""
api/app.py — FastAPI app instance + client-context middleware
"""

import logging
import threading
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

import config
from api.routes import router
from api.sample_questions import SAMPLE_COURSES, SAMPLE_QUESTIONS
import api.session as session
from uniwise_cbt.services.question_bank import QuestionBank

SESSION_COOKIE = "cbt_session"

logger = logging.getLogger(__name__)


def create_app(question_bank: QuestionBank | None = None, start_cleanup: bool = True) -> FastAPI:
    app = FastAPI(title="UniWise CBT", docs_url=None, redoc_url=None)
    app.state.question_bank = question_bank or QuestionBank(SAMPLE_COURSES, SAMPLE_QUESTIONS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Read the context id from the cookie, issue a new one if missing
    @app.middleware("http")
    async def session_middleware(request: Request, call_next):
        sid = request.cookies.get(SESSION_COOKIE)
        if not sid or session.get_session(sid) is None:
            sid = session.create_session()

        request.state.session_id = sid
        response: Response = await call_next(request)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=sid,
            httponly=True,
            samesite="lax",
            max_age=session.SESSION_TTL,
        )
        return response

    app.include_router(router)

    # Periodic cleanup of expired contexts
    def _cleanup_loop():
        while True:
            time.sleep(config.CLEANUP_INTERVAL)
            removed = session.cleanup_expired()
            if removed:
                logger.info(f"Removed {removed} expired client sessions")

    if start_cleanup:
        t = threading.Thread(target=_cleanup_loop, daemon=True)
        t.start()

    return app
