"""
PublicationGate — 시험 단위 결과 공개 상태 머신

NOT_PUBLISHED → PUBLISHED → NOT_PUBLISHED

publish:
- 모든 응시 학생의 비객관식 응답에 현재 채점 기록이 있어야 함
- 한 번 읽은 총점 스냅샷으로 모든 Result를 upsert (석차 상호 일관)
- 모든 Result 반영 이후에만 ExamPublication을 PUBLISHED로 전환
unpublish:
- 노출 여부만 되돌림. GradingRecord/Result 값은 그대로
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.application.use_cases.grading import grading_ledger, result_aggregator
from quizportal.application.use_cases.grading.guards import require_exam, require_owner, to_decimal, utcnow
from quizportal.domain.grading.entities import ExamPublication
from quizportal.domain.grading.errors import Conflict, ValidationError
from quizportal.domain.grading.ranking import grading_progress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublicationResult:
    exam_id: int
    is_published: bool
    total_students: int
    graded_students: int
    results_affected: int
    passing_percentage: Decimal
    published_at: Optional[datetime] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class PublicationSnapshot:
    exam_id: int
    is_published: bool
    total_students: int
    graded_students: int
    grading_progress_percent: Decimal
    passing_percentage: Optional[Decimal] = None
    published_by: Optional[int] = None
    published_at: Optional[datetime] = None
    notes: Optional[str] = None


def _load_publication(uow: UnitOfWork, exam_id: int, now: datetime) -> ExamPublication:
    publication = uow.publications.get_for_update(exam_id)
    if publication is None:
        publication = ExamPublication(exam_id=exam_id, created_at=now)
    return publication


def publish(
    uow: UnitOfWork,
    exam_id: int,
    teacher_id: int,
    passing_percentage,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> PublicationResult:
    now = now or utcnow()
    with uow:
        exam = require_exam(uow, exam_id)
        require_owner(exam, teacher_id)

        pct = to_decimal(passing_percentage, "passing_percentage")
        if pct < 0 or pct > 100:
            raise ValidationError("passing_percentage must be between 0 and 100")

        publication = _load_publication(uow, exam.exam_id, now)
        if publication.is_published:
            raise Conflict(f"Exam {exam_id} is already published")

        progress = grading_ledger.completeness(uow, exam.exam_id)
        if progress.total_students == 0:
            raise Conflict(f"Exam {exam_id} has no responses to publish")
        if not progress.is_complete:
            logger.warning(
                "publish rejected for exam %s: %s/%s students graded",
                exam_id, progress.graded_students, progress.total_students,
            )
            raise Conflict(
                f"All responses must be graded before publishing "
                f"({progress.graded_students}/{progress.total_students} students graded)"
            )

        snapshot = result_aggregator.totals_snapshot(uow, exam)
        student_ids = set(uow.responses.student_ids(exam.exam_id))
        student_ids.update(r.student_id for r in uow.results.list_for_exam(exam.exam_id))

        for student_id in sorted(student_ids):
            result = result_aggregator.upsert_result(
                uow,
                exam.exam_id,
                student_id,
                publishing=True,
                evaluator_id=int(teacher_id),
                snapshot=snapshot,
                now=now,
            )
            result.publish(now)
            uow.results.save(result)

        try:
            publication.publish(
                teacher_id=int(teacher_id),
                passing_percentage=pct,
                total_students=progress.total_students,
                graded_students=progress.graded_students,
                notes=notes,
                now=now,
            )
        except ValueError as exc:
            raise Conflict(str(exc))
        publication = uow.publications.save(publication)

    logger.info(
        "exam %s published by teacher %s (%s results, passing=%s%%)",
        exam_id, teacher_id, len(student_ids), pct,
    )
    return PublicationResult(
        exam_id=exam.exam_id,
        is_published=True,
        total_students=publication.total_students,
        graded_students=publication.graded_students,
        results_affected=len(student_ids),
        passing_percentage=publication.passing_percentage,
        published_at=publication.published_at,
        notes=publication.notes,
    )


def unpublish(
    uow: UnitOfWork,
    exam_id: int,
    teacher_id: int,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> PublicationResult:
    now = now or utcnow()
    with uow:
        exam = require_exam(uow, exam_id)
        require_owner(exam, teacher_id)

        publication = uow.publications.get_for_update(exam.exam_id)
        if publication is None or not publication.is_published:
            raise Conflict(f"Exam {exam_id} is not published")

        results = uow.results.list_for_exam(exam.exam_id)
        hidden = 0
        for result in results:
            locked = uow.results.get_for_update(exam.exam_id, result.student_id)
            if locked is None or not locked.is_published:
                continue
            locked.hide(now)
            uow.results.save(locked)
            hidden += 1

        publication.unpublish(reason, now)
        publication = uow.publications.save(publication)

    logger.info("exam %s unpublished by teacher %s (%s results hidden)", exam_id, teacher_id, hidden)
    return PublicationResult(
        exam_id=exam.exam_id,
        is_published=False,
        total_students=publication.total_students,
        graded_students=publication.graded_students,
        results_affected=hidden,
        passing_percentage=publication.passing_percentage,
        published_at=None,
        notes=publication.notes,
    )


def status_of(uow: UnitOfWork, exam_id: int) -> PublicationSnapshot:
    """언제든 호출 가능한 읽기 전용 projection. 학생 수는 현재 응답 기준으로 계산."""
    with uow:
        exam = require_exam(uow, exam_id)
        publication = uow.publications.get(exam.exam_id)
        progress = grading_ledger.completeness(uow, exam.exam_id)

    if publication is None:
        return PublicationSnapshot(
            exam_id=exam.exam_id,
            is_published=False,
            total_students=progress.total_students,
            graded_students=progress.graded_students,
            grading_progress_percent=grading_progress(progress.graded_students, progress.total_students),
        )

    return PublicationSnapshot(
        exam_id=exam.exam_id,
        is_published=publication.is_published,
        total_students=progress.total_students,
        graded_students=progress.graded_students,
        grading_progress_percent=grading_progress(progress.graded_students, progress.total_students),
        passing_percentage=publication.passing_percentage,
        published_by=publication.published_by,
        published_at=publication.published_at,
        notes=publication.notes,
    )
