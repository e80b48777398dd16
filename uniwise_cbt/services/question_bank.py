"""
services/question_bank.py

Read-only in-memory question repository.
"""

import logging
from typing import Dict, Iterable, List, Optional

from uniwise_cbt.models.question_model import Course, Question

logger = logging.getLogger(__name__)


class QuestionBank:

    def __init__(
        self,
        courses: Iterable[Course],
        questions: Dict[str, List[Question]],
    ) -> None:
        self._courses: Dict[str, Course] = {}
        self._questions: Dict[str, List[Question]] = {}
        for course in courses:
            pool = tuple(questions.get(course.id, []))
            self._courses[course.id] = course.model_copy(update={"question_count": len(pool)})
            self._questions[course.id] = list(pool)
        logger.info(
            f"Question bank loaded: {len(self._courses)} courses, "
            f"{sum(len(p) for p in self._questions.values())} questions"
        )

    def list_courses(self, code_prefix: Optional[str] = None) -> List[Course]:
        """Courses sorted by code, optionally filtered by code prefix (e.g. 'GSS')."""
        courses = sorted(self._courses.values(), key=lambda c: c.code)
        if code_prefix:
            courses = [c for c in courses if c.code.startswith(code_prefix)]
        return courses

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get(course_id)

    def get_questions(self, course_id: str) -> List[Question]:
        """Question pool for a course. Empty for unknown courses. Returns a copy."""
        return list(self._questions.get(course_id, []))
