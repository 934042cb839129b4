"""
GradingLedger — 주관식/단답형 수동 채점 원장 Use Case

불변 규칙:
- GradingRecord는 append-only. 재채점은 새 레코드 + 직전 레코드 REGRADED 처리
- 응답당 현재(GRADED) 레코드는 최대 1개
- 이미 채점된 응답에 grade_single → Conflict (regrade 사용)
- 객관식은 자동채점 대상이므로 pending/수동채점 대상이 아님
- 채점 결과는 StudentResponse.marks_obtained / is_correct에 mirror
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.application.use_cases.grading import result_aggregator
from quizportal.application.use_cases.grading.guards import (
    ensure_not_published,
    require_exam,
    require_owner,
    utcnow,
    validate_marks,
)
from quizportal.domain.grading.entities import (
    ExamInfo,
    GradingRecord,
    GradingStatus,
    Page,
    QuestionInfo,
    StudentResponse,
)
from quizportal.domain.grading.errors import Conflict, GradingDomainError, NotFound, ValidationError
from quizportal.domain.grading.ranking import grading_progress
from quizportal.domain.shared.result import Err, Ok, Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeItem:
    response_id: int
    marks_obtained: Decimal
    feedback: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class BatchGradeReport:
    success_count: int
    fail_count: int
    outcomes: list = field(default_factory=list)


@dataclass(frozen=True)
class PendingItem:
    response: StudentResponse
    question: QuestionInfo


@dataclass(frozen=True)
class ResponseForGrading:
    response: StudentResponse
    question: QuestionInfo
    current: Optional[GradingRecord]

    @property
    def is_graded(self) -> bool:
        return self.question.is_objective or self.current is not None


@dataclass(frozen=True)
class GradingCompleteness:
    total_students: int
    graded_students: int
    total_responses: int
    pending_responses: int

    @property
    def progress_percent(self) -> Decimal:
        return grading_progress(self.graded_students, self.total_students)

    @property
    def is_complete(self) -> bool:
        return self.graded_students == self.total_students


@dataclass(frozen=True)
class QuestionGradingStats:
    question_id: int
    question_type: str
    max_marks: Decimal
    total_responses: int
    graded_responses: int
    pending_responses: int
    average_marks: Decimal


@dataclass(frozen=True)
class GradingStats:
    exam_id: int
    total_questions: int
    completeness: GradingCompleteness
    questions: list = field(default_factory=list)


# -------------------------------------------------
# internal helpers (트랜잭션 안에서만 호출)
# -------------------------------------------------
def _load_for_grading(
    uow: UnitOfWork,
    response_id: int,
    teacher_id: int,
) -> tuple[StudentResponse, QuestionInfo, ExamInfo]:
    response = uow.responses.get_for_update(int(response_id))
    if response is None:
        raise NotFound(f"Response {response_id} not found")

    exam = require_exam(uow, response.exam_id)
    require_owner(exam, teacher_id)
    ensure_not_published(
        uow,
        exam.exam_id,
        "Cannot change marks for a published exam. Unpublish the exam first.",
    )

    question = uow.exams.get_question(response.question_id)
    if question is None:
        raise NotFound(f"Question {response.question_id} not found")
    if question.is_objective:
        raise Conflict("Objective responses are auto-graded and cannot be graded manually")
    return response, question, exam


def _index_questions(uow: UnitOfWork, exam_id: int) -> dict[int, QuestionInfo]:
    return {q.question_id: q for q in uow.exams.list_questions(exam_id)}


def _current_records(uow: UnitOfWork, responses: Iterable[StudentResponse]) -> dict[int, GradingRecord]:
    ids = [int(r.response_id) for r in responses if r.response_id is not None]
    if not ids:
        return {}
    return uow.grading_records.current_for_responses(ids)


def _is_pending(
    response: StudentResponse,
    questions: dict[int, QuestionInfo],
    current: dict[int, GradingRecord],
) -> bool:
    question = questions.get(response.question_id)
    if question is not None and question.is_objective:
        return False
    return response.response_id not in current


# -------------------------------------------------
# write
# -------------------------------------------------
def grade_single(
    uow: UnitOfWork,
    response_id: int,
    teacher_id: int,
    marks_obtained,
    feedback: Optional[str] = None,
    comment: Optional[str] = None,
    is_partial_credit: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> GradingRecord:
    """
    첫 채점. 현재 레코드가 이미 있으면 Conflict.
    성공 시 레코드 추가 + 응답 mirror 갱신 + 시험 Result 재계산 (한 트랜잭션).
    """
    now = now or utcnow()
    with uow:
        response, question, exam = _load_for_grading(uow, response_id, teacher_id)
        marks = validate_marks(marks_obtained, question)

        if uow.grading_records.current_for_update(int(response.response_id)) is not None:
            raise Conflict(f"Response {response_id} is already graded; use regrade instead")

        if is_partial_credit is None:
            is_partial_credit = Decimal("0") < marks < question.marks

        record = uow.grading_records.append(
            GradingRecord(
                response_id=int(response.response_id),
                question_id=response.question_id,
                student_id=response.student_id,
                graded_by_teacher_id=int(teacher_id),
                marks_obtained=marks,
                graded_at=now,
                status=GradingStatus.GRADED,
                feedback=feedback,
                comment=comment,
                is_partial_credit=bool(is_partial_credit),
            )
        )

        response.apply_grade(marks, marks > 0)
        uow.responses.save(response)

        result_aggregator.recalculate_ranks(uow, exam.exam_id, now=now)

    logger.info("response %s graded by teacher %s with %s marks", response_id, teacher_id, marks)
    return record


def regrade(
    uow: UnitOfWork,
    response_id: int,
    teacher_id: int,
    new_marks,
    reason: Optional[str],
    new_feedback: Optional[str] = None,
    comment: Optional[str] = None,
    now: Optional[datetime] = None,
) -> GradingRecord:
    """
    재채점. 직전 레코드는 REGRADED로 이력화되고 새 레코드가 regrade_from으로 연결된다.
    """
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("A reason is required to regrade a response")

    now = now or utcnow()
    with uow:
        response, question, exam = _load_for_grading(uow, response_id, teacher_id)
        marks = validate_marks(new_marks, question, field="new_marks")

        prior = uow.grading_records.current_for_update(int(response.response_id))
        if prior is None:
            raise Conflict(f"Response {response_id} has no grading record to regrade")

        uow.grading_records.mark_historical(prior.superseded(GradingStatus.REGRADED))
        record = uow.grading_records.append(
            GradingRecord(
                response_id=int(response.response_id),
                question_id=response.question_id,
                student_id=response.student_id,
                graded_by_teacher_id=int(teacher_id),
                marks_obtained=marks,
                graded_at=now,
                status=GradingStatus.GRADED,
                feedback=new_feedback,
                comment=comment,
                is_partial_credit=Decimal("0") < marks < question.marks,
                regrade_from=prior.record_id,
                regrade_reason=reason,
                regraded_at=now,
            )
        )

        response.apply_grade(marks, marks > 0)
        uow.responses.save(response)

        result_aggregator.recalculate_ranks(uow, exam.exam_id, now=now)

    logger.info(
        "response %s regraded by teacher %s: %s -> %s (%s)",
        response_id, teacher_id, prior.marks_obtained, marks, reason,
    )
    return record


def batch_grade(
    uow: UnitOfWork,
    exam_id: int,
    question_id: int,
    teacher_id: int,
    items: Iterable[GradeItem],
    now: Optional[datetime] = None,
) -> BatchGradeReport:
    """
    best-effort 일괄 채점.
    항목마다 별도 트랜잭션으로 grade_single 적용, 도메인 오류는 실패 건수로 집계.
    시험 자체가 없거나 소유자가 아니면 전체 실패(예외).
    """
    with uow:
        exam = require_exam(uow, exam_id)
        require_owner(exam, teacher_id)

    outcomes: list[Outcome] = []
    for item in items:
        try:
            with uow:
                response = uow.responses.get(int(item.response_id))
                if response is None:
                    raise NotFound(f"Response {item.response_id} not found")
                if response.exam_id != exam.exam_id or response.question_id != int(question_id):
                    raise ValidationError(
                        f"Response {item.response_id} does not belong to question {question_id} of exam {exam_id}"
                    )
                record = grade_single(
                    uow,
                    item.response_id,
                    teacher_id,
                    item.marks_obtained,
                    feedback=item.feedback,
                    comment=item.comment,
                    now=now,
                )
            outcomes.append(Ok(record))
        except GradingDomainError as exc:
            logger.warning("batch grade item failed (response_id=%s): %s", item.response_id, exc.message)
            outcomes.append(Err(message=exc.message, code=exc.code))

    success = sum(1 for o in outcomes if o.ok)
    report = BatchGradeReport(success_count=success, fail_count=len(outcomes) - success, outcomes=outcomes)
    logger.info(
        "batch grade exam=%s question=%s: %s succeeded, %s failed",
        exam_id, question_id, report.success_count, report.fail_count,
    )
    return report


# -------------------------------------------------
# read
# -------------------------------------------------
def pending_for(
    uow: UnitOfWork,
    exam_id: int,
    question_id: Optional[int] = None,
    student_id: Optional[int] = None,
    page: int = 1,
    page_size: int = 10,
) -> Page:
    """현재 레코드가 없는 비객관식 응답 (제출 순)."""
    if int(page) < 1 or int(page_size) < 1:
        raise ValidationError("page and page_size must be positive")

    with uow:
        exam = require_exam(uow, exam_id)
        questions = _index_questions(uow, exam.exam_id)
        responses = uow.responses.list_for_exam(
            exam.exam_id,
            question_id=int(question_id) if question_id is not None else None,
            student_id=int(student_id) if student_id is not None else None,
        )
        current = _current_records(uow, responses)
        pending = [
            r for r in responses
            if r.question_id in questions and _is_pending(r, questions, current)
        ]

    start = (int(page) - 1) * int(page_size)
    items = [
        PendingItem(response=r, question=questions[r.question_id])
        for r in pending[start:start + int(page_size)]
    ]
    return Page(items=items, total=len(pending), page=int(page), page_size=int(page_size))


def is_graded(uow: UnitOfWork, response_id: int) -> bool:
    with uow:
        response = uow.responses.get(int(response_id))
        if response is None:
            raise NotFound(f"Response {response_id} not found")
        question = uow.exams.get_question(response.question_id)
        if question is not None and question.is_objective:
            return True
        return int(response_id) in uow.grading_records.current_for_responses([int(response_id)])


def history(uow: UnitOfWork, response_id: int, teacher_id: int) -> list[GradingRecord]:
    """전체 감사 이력, 최신순. 시험 소유 강사만."""
    with uow:
        response = uow.responses.get(int(response_id))
        if response is None:
            raise NotFound(f"Response {response_id} not found")
        require_owner(require_exam(uow, response.exam_id), teacher_id)
        return uow.grading_records.history(int(response_id))


def response_for_grading(uow: UnitOfWork, response_id: int, teacher_id: int) -> ResponseForGrading:
    with uow:
        response = uow.responses.get(int(response_id))
        if response is None:
            raise NotFound(f"Response {response_id} not found")
        exam = require_exam(uow, response.exam_id)
        require_owner(exam, teacher_id)
        question = uow.exams.get_question(response.question_id)
        if question is None:
            raise NotFound(f"Question {response.question_id} not found")
        current = uow.grading_records.current_for_responses([int(response_id)]).get(int(response_id))
        return ResponseForGrading(response=response, question=question, current=current)


def completeness(uow: UnitOfWork, exam_id: int) -> GradingCompleteness:
    """
    graded_students: 모든 응답이 객관식이거나 현재 레코드를 가진 학생 수.
    """
    with uow:
        exam = require_exam(uow, exam_id)
        questions = _index_questions(uow, exam.exam_id)
        responses = uow.responses.list_for_exam(exam.exam_id)
        current = _current_records(uow, responses)

    students: dict[int, bool] = {}
    pending_count = 0
    for r in responses:
        pending = _is_pending(r, questions, current)
        if pending:
            pending_count += 1
        students[r.student_id] = students.get(r.student_id, True) and not pending

    return GradingCompleteness(
        total_students=len(students),
        graded_students=sum(1 for done in students.values() if done),
        total_responses=len(responses),
        pending_responses=pending_count,
    )


def grading_stats(uow: UnitOfWork, exam_id: int, teacher_id: int) -> GradingStats:
    with uow:
        exam = require_exam(uow, exam_id)
        require_owner(exam, teacher_id)
        questions = uow.exams.list_questions(exam.exam_id)
        responses = uow.responses.list_for_exam(exam.exam_id)
        current = _current_records(uow, responses)
        overall = completeness(uow, exam.exam_id)

    by_question: dict[int, list[StudentResponse]] = {}
    for r in responses:
        by_question.setdefault(r.question_id, []).append(r)

    index = {q.question_id: q for q in questions}
    rows = []
    for q in questions:
        rs = by_question.get(q.question_id, [])
        graded = [r for r in rs if not _is_pending(r, index, current)]
        avg = Decimal("0.00")
        if graded:
            avg = (sum((r.marks_obtained for r in graded), Decimal("0")) / len(graded)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        rows.append(
            QuestionGradingStats(
                question_id=q.question_id,
                question_type=q.question_type.value,
                max_marks=q.marks,
                total_responses=len(rs),
                graded_responses=len(graded),
                pending_responses=len(rs) - len(graded),
                average_marks=avg,
            )
        )

    return GradingStats(
        exam_id=exam.exam_id,
        total_questions=len(questions),
        completeness=overall,
        questions=rows,
    )
