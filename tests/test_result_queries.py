from decimal import Decimal

import pytest

from quizportal.application.use_cases.grading import (
    grading_ledger,
    publication_gate,
    response_store,
    result_queries,
)
from quizportal.domain.grading.errors import NotFound, Unauthorized
from tests.conftest import EXAM, OBJ_1, OBJ_2, OTHER_TEACHER, SUBJ, TEACHER, at


@pytest.fixture
def published(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, 1, "B", now=at(0))
    response_store.submit(exam_uow, EXAM, OBJ_2, 1, "Rome", now=at(0))
    r = response_store.submit(exam_uow, EXAM, SUBJ, 1, "essay", now=at(0))
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "8", feedback="clear", now=at(1))

    response_store.submit(exam_uow, EXAM, OBJ_1, 2, "B", now=at(2))
    publication_gate.publish(exam_uow, EXAM, TEACHER, 60, now=at(5))
    return exam_uow


def test_published_result_for_student(published):
    result = result_queries.published_result(published, EXAM, 1)
    assert result.total_marks == Decimal("13")
    assert result.is_published is True
    assert [r.exam_id for r in result_queries.published_results(published, 1)] == [EXAM]


def test_hidden_result_is_not_found(published):
    publication_gate.unpublish(published, EXAM, TEACHER, now=at(6))
    with pytest.raises(NotFound):
        result_queries.published_result(published, EXAM, 1)
    assert result_queries.published_results(published, 1) == []


def test_unknown_result_is_not_found(published):
    with pytest.raises(NotFound):
        result_queries.published_result(published, EXAM, 99)


def test_result_detail_breakdown(published):
    detail = result_queries.result_detail(published, EXAM, 2)

    assert detail.exam_total_marks == Decimal("20")
    assert detail.passing_percentage == Decimal("60")
    assert detail.is_passed is False
    assert (detail.correct_count, detail.wrong_count, detail.unanswered_count) == (1, 0, 2)
    by_question = {q.question_id: q for q in detail.questions}
    assert by_question[OBJ_1].correct_answer == "B"
    assert by_question[SUBJ].correct_answer is None
    assert by_question[SUBJ].answer_text is None


def test_result_detail_carries_feedback(published):
    detail = result_queries.result_detail(published, EXAM, 1)
    by_question = {q.question_id: q for q in detail.questions}
    assert by_question[SUBJ].feedback == "clear"
    assert by_question[SUBJ].marks_obtained == Decimal("8")
    assert detail.is_passed is True


def test_exam_results_sorted_by_rank(published):
    results = result_queries.exam_results(published, EXAM, TEACHER)
    assert [(r.student_id, r.rank) for r in results] == [(1, 1), (2, 2)]
    with pytest.raises(Unauthorized):
        result_queries.exam_results(published, EXAM, OTHER_TEACHER)
