"""
ResultAggregator — 학생별 총점 / 백분율 / 석차 계산 및 Result 반영

- 총점은 응답 marks_obtained의 합 (시험 정책에 따라 0 하한)
- 석차는 한 번 읽은 전체 학생 총점 스냅샷에서만 계산 → 같은 호출 안의 석차는 서로 일관적
- 공개 여부(is_published)는 여기서 바꾸지 않는다 (PublicationGate 책임)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional

from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.application.use_cases.grading.guards import require_exam, utcnow
from quizportal.domain.grading.entities import ExamInfo, Result, ResultStatus
from quizportal.domain.grading.ranking import competition_rank, compute_percentage, floor_total

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Totals:
    total_marks: Decimal
    percentage: Decimal
    exam_total_marks: Decimal


def totals_snapshot(uow: UnitOfWork, exam: ExamInfo) -> dict[int, Decimal]:
    """student_id → (하한 적용된) 총점. 응답이 있는 학생만 포함."""
    raw = uow.responses.totals_by_student(exam.exam_id)
    return {
        int(student_id): floor_total(Decimal(total), exam.allow_negative_total)
        for student_id, total in raw.items()
    }


def compute_totals(uow: UnitOfWork, exam_id: int, student_id: int) -> Totals:
    with uow:
        exam = require_exam(uow, exam_id)
        responses = uow.responses.list_for_exam(exam.exam_id, student_id=int(student_id))
        total = sum((r.marks_obtained for r in responses), Decimal("0"))
        total = floor_total(total, exam.allow_negative_total)
        return Totals(
            total_marks=total,
            percentage=compute_percentage(total, exam.total_marks),
            exam_total_marks=exam.total_marks,
        )


def compute_rank(uow: UnitOfWork, exam_id: int, student_id: int, total_marks: Decimal) -> int:
    """1 + (total_marks보다 총점이 큰 학생 수). 동점은 같은 석차."""
    with uow:
        exam = require_exam(uow, exam_id)
        snapshot = totals_snapshot(uow, exam)
        return competition_rank(Decimal(total_marks), snapshot.values())


def _apply(
    result: Result,
    exam: ExamInfo,
    snapshot: Mapping[int, Decimal],
    now: datetime,
) -> Result:
    total = snapshot.get(result.student_id, Decimal("0"))
    result.apply_totals(
        total_marks=total,
        percentage=compute_percentage(total, exam.total_marks),
        rank=competition_rank(total, snapshot.values()),
        now=now,
    )
    return result


def upsert_result(
    uow: UnitOfWork,
    exam_id: int,
    student_id: int,
    publishing: bool = False,
    evaluator_id: Optional[int] = None,
    snapshot: Optional[Mapping[int, Decimal]] = None,
    now: Optional[datetime] = None,
) -> Result:
    """
    총점/석차 계산 후 Result 행 생성 또는 갱신.
    publishing=True면 status=GRADED + 평가자/평가 시각 기록.
    snapshot을 넘기면 그 스냅샷으로 석차 계산 (publish 루프용).
    """
    now = now or utcnow()
    with uow:
        exam = require_exam(uow, exam_id)
        if snapshot is None:
            snapshot = totals_snapshot(uow, exam)

        result = uow.results.get_for_update(exam.exam_id, int(student_id))
        if result is None:
            result = Result(
                exam_id=exam.exam_id,
                student_id=int(student_id),
                status=ResultStatus.COMPLETED,
                created_at=now,
            )

        _apply(result, exam, snapshot, now)
        if publishing:
            result.status = ResultStatus.GRADED
            result.evaluated_by = evaluator_id
            result.evaluated_at = now

        return uow.results.save(result)


def recalculate_ranks(uow: UnitOfWork, exam_id: int, now: Optional[datetime] = None) -> int:
    """
    시험의 기존 Result 전체를 같은 스냅샷으로 재계산.
    새 Result는 만들지 않는다. 갱신된 Result 수 반환.
    """
    now = now or utcnow()
    with uow:
        exam = require_exam(uow, exam_id)
        results = uow.results.list_for_exam(exam.exam_id)
        if not results:
            return 0
        snapshot = totals_snapshot(uow, exam)
        for result in results:
            uow.results.save(_apply(result, exam, snapshot, now))
        logger.info("recalculated %s results for exam %s", len(results), exam.exam_id)
        return len(results)
