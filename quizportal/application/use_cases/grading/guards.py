"""
채점 use case 공통 경계 검증

목적:
- 모든 쓰기 경로에서 같은 순서/같은 오류로 시험 상태를 검증
- 공개된 시험 수정, 타인 시험 채점 등 운영 사고 차단
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.domain.grading.entities import ExamInfo, QuestionInfo
from quizportal.domain.grading.errors import Conflict, NotFound, Unauthorized, ValidationError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_exam(uow: UnitOfWork, exam_id: int) -> ExamInfo:
    exam = uow.exams.get_exam(int(exam_id))
    if exam is None:
        raise NotFound(f"Exam {exam_id} not found")
    return exam


def require_question(uow: UnitOfWork, question_id: int, exam_id: Optional[int] = None) -> QuestionInfo:
    question = uow.exams.get_question(int(question_id))
    if question is None:
        raise NotFound(f"Question {question_id} not found")
    if exam_id is not None and question.exam_id != int(exam_id):
        raise NotFound(f"Question {question_id} does not belong to exam {exam_id}")
    return question


def require_owner(exam: ExamInfo, teacher_id: int) -> None:
    if exam.owner_teacher_id != int(teacher_id):
        logger.warning("teacher %s is not the owner of exam %s", teacher_id, exam.exam_id)
        raise Unauthorized("You can only manage your own exams")


def is_published(uow: UnitOfWork, exam_id: int) -> bool:
    publication = uow.publications.get(int(exam_id))
    return bool(publication and publication.is_published)


def ensure_not_published(uow: UnitOfWork, exam_id: int, message: str) -> None:
    if is_published(uow, exam_id):
        raise Conflict(message)


def to_decimal(value: Any, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        out = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not out.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return out


def validate_marks(value: Any, question: QuestionInfo, field: str = "marks_obtained") -> Decimal:
    marks = to_decimal(value, field)
    if marks < 0 or marks > question.marks:
        raise ValidationError(f"{field} must be between 0 and {question.marks}")
    return marks
