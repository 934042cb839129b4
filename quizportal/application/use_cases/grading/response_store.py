"""
ResponseStore — 학생 답안 제출/최종 제출/철회

불변 규칙:
- (exam, question, student) 당 응답 1개 (재제출은 덮어쓰기)
- 공개된 시험 / 응시 기간 종료 / 이미 Result가 있는 학생은 제출 불가
- 객관식은 제출 시점에 자동채점
- 재제출 시 현재 수동 채점 기록은 INVALIDATED 처리되고 응답은 다시 pending
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.application.use_cases.grading import result_aggregator
from quizportal.application.use_cases.grading.guards import (
    ensure_not_published,
    require_exam,
    require_question,
    utcnow,
)
from quizportal.domain.grading.auto_grader import auto_grade
from quizportal.domain.grading.entities import (
    ExamInfo,
    GradingStatus,
    QuestionInfo,
    Result,
    StudentResponse,
)
from quizportal.domain.grading.errors import Conflict, NotFound, Unauthorized

logger = logging.getLogger(__name__)


def _ensure_editable(uow: UnitOfWork, exam: ExamInfo, student_id: int) -> None:
    ensure_not_published(uow, exam.exam_id, "Exam results are already published")
    if not exam.is_open:
        raise Conflict(f"Exam {exam.exam_id} is not accepting submissions")
    if uow.results.get(exam.exam_id, int(student_id)) is not None:
        raise Conflict(f"Attempt for exam {exam.exam_id} is already finalized")


def _evaluate(uow: UnitOfWork, response: StudentResponse, question: QuestionInfo, exam: ExamInfo) -> None:
    if question.is_objective:
        outcome = auto_grade(question, response.answer_text, negative_marking=exam.has_negative_marking)
        response.apply_grade(outcome.marks_obtained, outcome.is_correct)
        return

    if response.response_id is not None:
        current = uow.grading_records.current_for_update(int(response.response_id))
        if current is not None:
            uow.grading_records.mark_historical(current.superseded(GradingStatus.INVALIDATED))
            logger.info(
                "grading record %s invalidated by resubmission of response %s",
                current.record_id, response.response_id,
            )
    response.clear_grade()


def submit(
    uow: UnitOfWork,
    exam_id: int,
    question_id: int,
    student_id: int,
    answer_text: str,
    now: Optional[datetime] = None,
) -> StudentResponse:
    now = now or utcnow()
    answer_text = answer_text if answer_text is not None else ""

    with uow:
        exam = require_exam(uow, exam_id)
        question = require_question(uow, question_id, exam_id=exam.exam_id)
        _ensure_editable(uow, exam, student_id)

        response = uow.responses.find_for_update(exam.exam_id, question.question_id, int(student_id))
        created = response is None
        if created:
            response = StudentResponse(
                exam_id=exam.exam_id,
                question_id=question.question_id,
                student_id=int(student_id),
                answer_text=answer_text,
                submitted_at=now,
            )
        else:
            response.answer_text = answer_text
            response.submitted_at = now

        _evaluate(uow, response, question, exam)

        if created:
            response = uow.responses.add(response)
        else:
            response = uow.responses.save(response)

    logger.info(
        "response %s %s (exam=%s question=%s student=%s)",
        response.response_id, "submitted" if created else "resubmitted",
        exam_id, question_id, student_id,
    )
    return response


def finalize(
    uow: UnitOfWork,
    exam_id: int,
    student_id: int,
    now: Optional[datetime] = None,
) -> Result:
    """응시 종료 → Result(COMPLETED) 생성 + 총점/석차 계산. 두 번째 호출은 Conflict."""
    now = now or utcnow()
    with uow:
        exam = require_exam(uow, exam_id)
        ensure_not_published(uow, exam.exam_id, "Exam results are already published")
        if uow.results.get_for_update(exam.exam_id, int(student_id)) is not None:
            raise Conflict(f"Attempt for exam {exam_id} is already finalized")

        result = result_aggregator.upsert_result(uow, exam.exam_id, int(student_id), now=now)
        result_aggregator.recalculate_ranks(uow, exam.exam_id, now=now)
        result = uow.results.get(exam.exam_id, int(student_id))

    logger.info("attempt finalized (exam=%s student=%s total=%s)", exam_id, student_id, result.total_marks)
    return result


def withdraw(uow: UnitOfWork, response_id: int, student_id: int) -> None:
    with uow:
        response = uow.responses.get_for_update(int(response_id))
        if response is None:
            raise NotFound(f"Response {response_id} not found")
        if response.student_id != int(student_id):
            logger.warning("student %s tried to withdraw response %s", student_id, response_id)
            raise Unauthorized("You can only withdraw your own responses")

        exam = require_exam(uow, response.exam_id)
        _ensure_editable(uow, exam, student_id)
        uow.responses.delete(int(response_id))

    logger.info("response %s withdrawn by student %s", response_id, student_id)
