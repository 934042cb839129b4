from decimal import Decimal

import pytest

from quizportal.application.use_cases.grading import grading_ledger, publication_gate, response_store
from quizportal.application.use_cases.grading.grading_ledger import GradeItem
from quizportal.domain.grading.entities import GradingStatus, QuestionType
from quizportal.domain.grading.errors import Conflict, NotFound, Unauthorized, ValidationError
from tests.conftest import EXAM, OBJ_1, OTHER_TEACHER, SUBJ, TEACHER, at


def _subjective(uow, student_id=7, minute=0):
    return response_store.submit(uow, EXAM, SUBJ, student_id, f"answer of {student_id}", now=at(minute))


def test_grade_single_records_and_mirrors(exam_uow):
    r = _subjective(exam_uow)

    record = grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", feedback="good", now=at(1))

    assert record.status == GradingStatus.GRADED
    assert record.marks_obtained == Decimal("7")
    assert record.is_partial_credit is True
    mirrored = exam_uow.responses.get(r.response_id)
    assert mirrored.marks_obtained == Decimal("7")
    assert mirrored.is_correct is True
    assert grading_ledger.is_graded(exam_uow, r.response_id) is True


def test_zero_marks_derive_incorrect(exam_uow):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, 0, now=at(1))
    assert exam_uow.responses.get(r.response_id).is_correct is False


@pytest.mark.parametrize("marks", ["-1", "10.01", "abc", None, True])
def test_grade_single_rejects_invalid_marks(exam_uow, marks):
    r = _subjective(exam_uow)
    with pytest.raises(ValidationError):
        grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, marks)
    assert grading_ledger.history(exam_uow, r.response_id, TEACHER) == []


def test_grade_single_on_graded_response_is_conflict(exam_uow):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))
    with pytest.raises(Conflict):
        grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "8", now=at(2))
    assert len(grading_ledger.history(exam_uow, r.response_id, TEACHER)) == 1


def test_grade_single_guards(exam_uow):
    r = _subjective(exam_uow)
    obj = response_store.submit(exam_uow, EXAM, OBJ_1, 7, "B", now=at(1))

    with pytest.raises(NotFound):
        grading_ledger.grade_single(exam_uow, 999, TEACHER, "1")
    with pytest.raises(Unauthorized):
        grading_ledger.grade_single(exam_uow, r.response_id, OTHER_TEACHER, "1")
    with pytest.raises(Conflict):
        grading_ledger.grade_single(exam_uow, obj.response_id, TEACHER, "5")


def test_grading_blocked_while_published(exam_uow):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))
    publication_gate.publish(exam_uow, EXAM, TEACHER, 50, now=at(2))

    with pytest.raises(Conflict):
        grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "9", reason="recount", now=at(3))


def test_regrade_appends_history(exam_uow):
    r = _subjective(exam_uow)
    first = grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))

    second = grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "9", reason="recount", now=at(2))

    history = grading_ledger.history(exam_uow, r.response_id, TEACHER)
    assert len(history) == 2
    assert history[0].record_id == second.record_id
    assert history[0].marks_obtained == Decimal("9")
    assert history[0].regrade_from == first.record_id
    assert history[0].regrade_reason == "recount"
    assert history[1].status == GradingStatus.REGRADED
    assert history[1].marks_obtained == Decimal("7")
    assert exam_uow.responses.get(r.response_id).marks_obtained == Decimal("9")


def test_regrade_chain_keeps_every_record(exam_uow):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))
    grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "9", reason="recount", now=at(2))
    grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "8", reason="appeal", now=at(3))

    history = grading_ledger.history(exam_uow, r.response_id, TEACHER)
    assert [h.marks_obtained for h in history] == [Decimal("8"), Decimal("9"), Decimal("7")]
    assert [h.is_current for h in history] == [True, False, False]


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_regrade_requires_reason(exam_uow, reason):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))
    with pytest.raises(ValidationError):
        grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "9", reason=reason)


def test_regrade_out_of_range_leaves_history_untouched(exam_uow):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "7", now=at(1))
    with pytest.raises(ValidationError):
        grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "11", reason="typo")
    history = grading_ledger.history(exam_uow, r.response_id, TEACHER)
    assert len(history) == 1 and history[0].is_current


def test_regrade_without_grade_is_conflict(exam_uow):
    r = _subjective(exam_uow)
    with pytest.raises(Conflict):
        grading_ledger.regrade(exam_uow, r.response_id, TEACHER, "5", reason="typo")


def test_batch_grade_reports_partial_success(exam_uow):
    a = _subjective(exam_uow, student_id=1, minute=0)
    b = _subjective(exam_uow, student_id=2, minute=1)
    obj = response_store.submit(exam_uow, EXAM, OBJ_1, 3, "B", now=at(2))

    report = grading_ledger.batch_grade(
        exam_uow,
        EXAM,
        SUBJ,
        TEACHER,
        [
            GradeItem(response_id=a.response_id, marks_obtained=Decimal("6")),
            GradeItem(response_id=b.response_id, marks_obtained=Decimal("42")),
            GradeItem(response_id=999, marks_obtained=Decimal("1")),
            GradeItem(response_id=obj.response_id, marks_obtained=Decimal("1")),
        ],
        now=at(3),
    )

    assert report.success_count == 1
    assert report.fail_count == 3
    assert [o.ok for o in report.outcomes] == [True, False, False, False]
    assert report.outcomes[1].code == "validation_error"
    assert report.outcomes[2].code == "not_found"
    assert grading_ledger.is_graded(exam_uow, a.response_id)
    assert not grading_ledger.is_graded(exam_uow, b.response_id)


def test_batch_grade_requires_exam_ownership(exam_uow):
    a = _subjective(exam_uow)
    with pytest.raises(Unauthorized):
        grading_ledger.batch_grade(
            exam_uow, EXAM, SUBJ, OTHER_TEACHER, [GradeItem(a.response_id, Decimal("1"))]
        )
    with pytest.raises(NotFound):
        grading_ledger.batch_grade(exam_uow, 999, SUBJ, TEACHER, [])


def test_pending_excludes_objective_and_graded(exam_uow):
    exam_uow.add_question(14, EXAM, QuestionType.SHORT_ANSWER, marks="2")
    a = _subjective(exam_uow, student_id=1, minute=0)
    b = _subjective(exam_uow, student_id=2, minute=1)
    c = response_store.submit(exam_uow, EXAM, 14, 1, "mitochondria", now=at(2))
    response_store.submit(exam_uow, EXAM, OBJ_1, 1, "B", now=at(3))
    grading_ledger.grade_single(exam_uow, a.response_id, TEACHER, "5", now=at(4))

    page = grading_ledger.pending_for(exam_uow, EXAM)
    assert page.total == 2
    assert [i.response.response_id for i in page.items] == [b.response_id, c.response_id]

    by_question = grading_ledger.pending_for(exam_uow, EXAM, question_id=14)
    assert [i.response.response_id for i in by_question.items] == [c.response_id]

    by_student = grading_ledger.pending_for(exam_uow, EXAM, student_id=2)
    assert [i.response.response_id for i in by_student.items] == [b.response_id]


def test_pending_is_paged(exam_uow):
    for s in range(1, 6):
        _subjective(exam_uow, student_id=s, minute=s)

    page = grading_ledger.pending_for(exam_uow, EXAM, page=2, page_size=2)
    assert page.total == 5
    assert page.total_pages == 3
    assert [i.response.student_id for i in page.items] == [3, 4]

    with pytest.raises(ValidationError):
        grading_ledger.pending_for(exam_uow, EXAM, page=0)


def test_history_of_unknown_response(exam_uow):
    with pytest.raises(NotFound):
        grading_ledger.history(exam_uow, 999, TEACHER)


def test_history_requires_exam_owner(exam_uow):
    r = _subjective(exam_uow)
    grading_ledger.grade_single(exam_uow, r.response_id, TEACHER, "6", feedback="private", now=at(1))

    with pytest.raises(Unauthorized):
        grading_ledger.history(exam_uow, r.response_id, OTHER_TEACHER)


def test_pending_count_matches_listed_items(exam_uow):
    exam_uow.add_question(14, EXAM, QuestionType.SHORT_ANSWER, marks="2")
    kept = _subjective(exam_uow, student_id=1, minute=0)
    response_store.submit(exam_uow, EXAM, 14, 2, "orphan", now=at(1))
    del exam_uow.state.questions[14]

    page = grading_ledger.pending_for(exam_uow, EXAM)
    assert page.total == 1
    assert [i.response.response_id for i in page.items] == [kept.response_id]


def test_grading_stats(exam_uow):
    a = _subjective(exam_uow, student_id=1, minute=0)
    _subjective(exam_uow, student_id=2, minute=1)
    response_store.submit(exam_uow, EXAM, OBJ_1, 1, "B", now=at(2))
    grading_ledger.grade_single(exam_uow, a.response_id, TEACHER, "6", now=at(3))

    stats = grading_ledger.grading_stats(exam_uow, EXAM, TEACHER)

    assert stats.total_questions == 3
    assert stats.completeness.total_students == 2
    assert stats.completeness.graded_students == 1
    assert stats.completeness.progress_percent == Decimal("50.00")
    subj = next(q for q in stats.questions if q.question_id == SUBJ)
    assert (subj.total_responses, subj.graded_responses, subj.pending_responses) == (2, 1, 1)
    assert subj.average_marks == Decimal("6.00")

    with pytest.raises(Unauthorized):
        grading_ledger.grading_stats(exam_uow, EXAM, OTHER_TEACHER)


def test_response_for_grading(exam_uow):
    r = _subjective(exam_uow)
    view = grading_ledger.response_for_grading(exam_uow, r.response_id, TEACHER)
    assert view.question.question_id == SUBJ
    assert view.current is None
    assert view.is_graded is False
