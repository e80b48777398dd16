import pytest
from pydantic import ValidationError

from conftest import make_pool
from uniwise_cbt.models.question_model import Question
from uniwise_cbt.models.session_state import CBTSession
from uniwise_cbt.services.exam_service import (
    calculate_score, format_time, get_incorrect_questions,
    is_passed, score_message, score_session,
)


def _session(questions, answers, **kw):
    return CBTSession(id="cbt-1", user_id="u", course_id="course-x",
                      questions=questions, answers=answers, **kw)


def test_percentage_is_unrounded():
    pool = make_pool(3)
    report = score_session(_session(pool, {pool[0].id: "a"}))
    assert report.percentage == 100 * 1 / 3
    assert report.correct_count == 1
    assert report.incorrect_count == 2


def test_partitions_cover_every_question():
    pool = make_pool(6)
    answers = {pool[0].id: "a", pool[1].id: "b", pool[2].id: "a", pool[3].id: "c"}
    report = score_session(_session(pool, answers))

    assert report.correct_count + report.incorrect_count == len(pool)
    assert report.percentage == 100 * report.correct_count / len(pool)
    assert [q.id for q in report.correct] == [pool[0].id, pool[2].id]
    assert [q.id for q in report.unanswered] == [pool[4].id, pool[5].id]
    assert all(q in report.incorrect for q in report.unanswered)


def test_all_correct_scores_100():
    pool = make_pool(5)
    report = score_session(_session(pool, {q.id: "a" for q in pool}))
    assert report.percentage == 100.0
    assert report.incorrect == []


def test_scoring_is_deterministic():
    pool = make_pool(4)
    s = _session(pool, {pool[1].id: "a"})
    assert score_session(s) == score_session(s)


def test_empty_question_list_scores_zero():
    assert calculate_score([], {}) == 0.0
    assert score_session(_session([], {})).percentage == 0.0


def test_incorrect_questions_keep_order():
    pool = make_pool(4)
    wrong = get_incorrect_questions(pool, {pool[0].id: "a", pool[2].id: "d"})
    assert [q.id for q in wrong] == [pool[1].id, pool[2].id, pool[3].id]


def test_score_message_thresholds():
    assert score_message(70).startswith("Excellent")
    assert score_message(69.9).startswith("Good job")
    assert score_message(50).startswith("Good job")
    assert score_message(49.99).startswith("Keep practicing")


def test_is_passed():
    assert is_passed(50.0)
    assert not is_passed(49.9)
    assert is_passed(60.0, pass_score=60.0)


def test_format_time():
    assert format_time(1800) == "30:00"
    assert format_time(65) == "01:05"
    assert format_time(0) == "00:00"
    assert format_time(-4) == "00:00"


def test_question_answer_must_be_an_option_key():
    with pytest.raises(ValidationError):
        Question(id="q1", course_id="c", content="?", options={"a": "x", "b": "y"}, answer="e")
    with pytest.raises(ValidationError):
        Question(id="q1", course_id="c", content="?", options={"a": "x"}, answer="a")


def test_public_dict_hides_answer():
    q = make_pool(1)[0]
    d = q.public_dict()
    assert "answer" not in d and "explanation" not in d
    assert d["options"] == {"a": "A", "b": "B", "c": "C", "d": "D"}


def test_score_session_matches_incorrect_helper():
    pool = make_pool(5)
    answers = {pool[0].id: "a", pool[1].id: "c"}
    report = score_session(_session(pool, answers))
    assert report.incorrect == get_incorrect_questions(pool, answers)
    assert [q.id for q in report.correct] == [pool[0].id]
