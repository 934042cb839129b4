from decimal import Decimal

import pytest

from quizportal.application.use_cases.grading import grading_ledger, publication_gate, response_store
from quizportal.domain.grading.entities import GradingStatus, ResultStatus
from quizportal.domain.grading.errors import Conflict, NotFound, Unauthorized
from tests.conftest import EXAM, OBJ_1, OBJ_2, SUBJ, TEACHER, at

STUDENT = 7


def test_objective_submission_is_auto_graded(exam_uow):
    r = response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(0))
    assert r.response_id is not None
    assert r.marks_obtained == Decimal("5")
    assert r.is_correct is True


def test_subjective_submission_is_pending(exam_uow):
    r = response_store.submit(exam_uow, EXAM, SUBJ, STUDENT, "Plants use light.", now=at(0))
    assert r.marks_obtained == Decimal("0")
    assert r.is_correct is None
    assert grading_ledger.is_graded(exam_uow, r.response_id) is False


def test_resubmission_overwrites_the_same_response(exam_uow):
    first = response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "A", now=at(0))
    second = response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(1))

    assert second.response_id == first.response_id
    assert second.is_correct is True
    assert len(exam_uow.responses.list_for_exam(EXAM, student_id=STUDENT)) == 1


def test_resubmission_invalidates_manual_grade(exam_uow):
    r = response_store.submit(exam_uow, EXAM, SUBJ, STUDENT, "draft", now=at(0))
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))

    again = response_store.submit(exam_uow, EXAM, SUBJ, STUDENT, "final answer", now=at(2))

    assert again.marks_obtained == Decimal("0")
    assert again.is_correct is None
    assert grading_ledger.is_graded(exam_uow, r.response_id) is False
    history = grading_ledger.history(exam_uow, r.response_id, TEACHER)
    assert [h.status for h in history] == [GradingStatus.INVALIDATED]


def test_submit_unknown_exam_or_question(exam_uow):
    with pytest.raises(NotFound):
        response_store.submit(exam_uow, 999, OBJ_1, STUDENT, "B")
    with pytest.raises(NotFound):
        response_store.submit(exam_uow, EXAM, 999, STUDENT, "B")


def test_submit_rejected_when_window_closed(exam_uow):
    exam_uow.set_exam_open(EXAM, False)
    with pytest.raises(Conflict):
        response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B")
    assert exam_uow.responses.list_for_exam(EXAM) == []


def test_submit_rejected_when_published(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(0))
    publication_gate.publish(exam_uow, EXAM, TEACHER, 50, now=at(1))

    with pytest.raises(Conflict):
        response_store.submit(exam_uow, EXAM, OBJ_2, STUDENT, "Paris", now=at(2))


def test_finalize_creates_completed_result(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(0))
    response_store.submit(exam_uow, EXAM, OBJ_2, STUDENT, "Rome", now=at(1))

    result = response_store.finalize(exam_uow, EXAM, STUDENT, now=at(2))

    assert result.status == ResultStatus.COMPLETED
    assert result.total_marks == Decimal("5")
    assert result.percentage == Decimal("25.00")
    assert result.rank == 1
    assert result.is_published is False


def test_finalize_twice_is_conflict(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(0))
    response_store.finalize(exam_uow, EXAM, STUDENT, now=at(1))
    with pytest.raises(Conflict):
        response_store.finalize(exam_uow, EXAM, STUDENT, now=at(2))


def test_submit_after_finalize_is_conflict(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(0))
    response_store.finalize(exam_uow, EXAM, STUDENT, now=at(1))
    with pytest.raises(Conflict):
        response_store.submit(exam_uow, EXAM, OBJ_2, STUDENT, "Paris", now=at(2))


def test_finalize_after_publish_is_conflict(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, 1, "B", now=at(0))
    publication_gate.publish(exam_uow, EXAM, TEACHER, 50, now=at(1))
    published = exam_uow.results.get(EXAM, 1)

    with pytest.raises(Conflict):
        response_store.finalize(exam_uow, EXAM, 2, now=at(2))

    assert exam_uow.results.get(EXAM, 2) is None
    assert exam_uow.results.get(EXAM, 1) == published


def test_finalize_refreshes_peer_ranks(exam_uow):
    response_store.submit(exam_uow, EXAM, OBJ_1, 1, "A", now=at(0))
    response_store.finalize(exam_uow, EXAM, 1, now=at(1))
    response_store.submit(exam_uow, EXAM, OBJ_1, 2, "B", now=at(2))
    response_store.finalize(exam_uow, EXAM, 2, now=at(3))

    assert exam_uow.results.get(EXAM, 2).rank == 1
    assert exam_uow.results.get(EXAM, 1).rank == 2


def test_withdraw_deletes_response_and_its_records(exam_uow):
    r = response_store.submit(exam_uow, EXAM, SUBJ, STUDENT, "text", now=at(0))
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "4", now=at(1))

    response_store.withdraw(exam_uow, r.response_id, STUDENT)

    assert exam_uow.responses.get(r.response_id) is None
    assert exam_uow.grading_records.history(r.response_id) == []


def test_withdraw_guards(exam_uow):
    r = response_store.submit(exam_uow, EXAM, OBJ_1, STUDENT, "B", now=at(0))
    with pytest.raises(NotFound):
        response_store.withdraw(exam_uow, 999, STUDENT)
    with pytest.raises(Unauthorized):
        response_store.withdraw(exam_uow, r.response_id, STUDENT + 1)

    response_store.finalize(exam_uow, EXAM, STUDENT, now=at(1))
    with pytest.raises(Conflict):
        response_store.withdraw(exam_uow, r.response_id, STUDENT)
    assert exam_uow.responses.get(r.response_id) is not None
