"""
Grading Repositories — Django ORM 구현
(메서드 내부에서만 apps.domains.submissions / apps.domains.results import)

쓰기 경로의 *_for_update는 호출자가 UoW 트랜잭션 안에 있어야 함 (select_for_update 락 유지).
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from quizportal.domain.grading.entities import (
    ExamPublication,
    GradingRecord,
    GradingStatus,
    PublicationStatus,
    Result,
    ResultStatus,
    StudentResponse,
)

logger = logging.getLogger(__name__)


# -------------------------------------------------
# model → entity
# -------------------------------------------------
def _response_to_entity(m) -> Optional[StudentResponse]:
    if m is None:
        return None
    return StudentResponse(
        exam_id=m.exam_id,
        question_id=m.question_id,
        student_id=m.student_id,
        answer_text=m.answer_text or "",
        submitted_at=m.submitted_at,
        marks_obtained=Decimal(m.marks_obtained or 0),
        is_correct=m.is_correct,
        response_id=m.id,
    )


def _record_to_entity(m) -> Optional[GradingRecord]:
    if m is None:
        return None
    return GradingRecord(
        response_id=m.response_id,
        question_id=m.question_id,
        student_id=m.student_id,
        graded_by_teacher_id=m.graded_by_teacher_id,
        marks_obtained=Decimal(m.marks_obtained),
        graded_at=m.graded_at,
        status=GradingStatus(m.status),
        feedback=m.feedback,
        comment=m.comment,
        is_partial_credit=bool(m.is_partial_credit),
        regrade_from=m.regrade_from_id,
        regrade_reason=m.regrade_reason,
        regraded_at=m.regraded_at,
        record_id=m.id,
    )


def _result_to_entity(m) -> Optional[Result]:
    if m is None:
        return None
    return Result(
        exam_id=m.exam_id,
        student_id=m.student_id,
        total_marks=Decimal(m.total_marks),
        percentage=Decimal(m.percentage),
        rank=m.rank,
        status=ResultStatus(m.status),
        is_published=bool(m.is_published),
        evaluated_by=m.evaluated_by,
        evaluated_at=m.evaluated_at,
        published_at=m.published_at,
        created_at=m.created_at,
        updated_at=m.updated_at,
        result_id=m.id,
    )


def _publication_to_entity(m) -> Optional[ExamPublication]:
    if m is None:
        return None
    return ExamPublication(
        exam_id=m.exam_id,
        status=PublicationStatus(m.status),
        total_students=int(m.total_students or 0),
        graded_students=int(m.graded_students or 0),
        passing_percentage=Decimal(m.passing_percentage),
        published_by=m.published_by,
        published_at=m.published_at,
        notes=m.notes,
        created_at=m.created_at,
        updated_at=m.updated_at,
        publication_id=m.id,
    )


# -------------------------------------------------
# StudentResponse
# -------------------------------------------------
class DjangoResponseRepository:
    """ResponseRepository 구현."""

    def get(self, response_id: int) -> Optional[StudentResponse]:
        from apps.domains.submissions.models import StudentResponse as ResponseModel
        return _response_to_entity(ResponseModel.objects.filter(id=response_id).first())

    def get_for_update(self, response_id: int) -> Optional[StudentResponse]:
        from apps.domains.submissions.models import StudentResponse as ResponseModel
        m = ResponseModel.objects.select_for_update().filter(id=response_id).first()
        return _response_to_entity(m)

    def find_for_update(self, exam_id: int, question_id: int, student_id: int) -> Optional[StudentResponse]:
        from apps.domains.submissions.models import StudentResponse as ResponseModel
        m = (
            ResponseModel.objects.select_for_update()
            .filter(exam_id=exam_id, question_id=question_id, student_id=student_id)
            .first()
        )
        return _response_to_entity(m)

    def add(self, response: StudentResponse) -> StudentResponse:
        from django.db import IntegrityError, transaction
        from apps.domains.results.models import GradingRecord as GradingRecordModel
        from apps.domains.submissions.models import StudentResponse as ResponseModel

        try:
            with transaction.atomic():
                m = ResponseModel.objects.create(
                    exam_id=response.exam_id,
                    question_id=response.question_id,
                    student_id=response.student_id,
                    answer_text=response.answer_text,
                    submitted_at=response.submitted_at,
                    marks_obtained=response.marks_obtained,
                    is_correct=response.is_correct,
                )
        except IntegrityError:
            # 동시 첫 제출: 먼저 커밋된 행을 마지막 쓰기로 덮어씀
            m = ResponseModel.objects.select_for_update().get(
                exam_id=response.exam_id,
                question_id=response.question_id,
                student_id=response.student_id,
            )
            logger.info(
                "concurrent submit converted to update (response_id=%s, student=%s)",
                m.id, response.student_id,
            )
            GradingRecordModel.objects.filter(
                response_id=m.id,
                status=GradingRecordModel.Status.GRADED,
            ).update(status=GradingRecordModel.Status.INVALIDATED)
            m.answer_text = response.answer_text
            m.submitted_at = response.submitted_at
            m.marks_obtained = response.marks_obtained
            m.is_correct = response.is_correct
            m.save(update_fields=["answer_text", "submitted_at", "marks_obtained", "is_correct", "updated_at"])

        return _response_to_entity(m)

    def save(self, response: StudentResponse) -> StudentResponse:
        from apps.domains.submissions.models import StudentResponse as ResponseModel

        m = ResponseModel.objects.get(id=response.response_id)
        m.answer_text = response.answer_text
        m.submitted_at = response.submitted_at
        m.marks_obtained = response.marks_obtained
        m.is_correct = response.is_correct
        m.save(update_fields=["answer_text", "submitted_at", "marks_obtained", "is_correct", "updated_at"])
        return _response_to_entity(m)

    def delete(self, response_id: int) -> None:
        from apps.domains.submissions.models import StudentResponse as ResponseModel
        ResponseModel.objects.filter(id=response_id).delete()

    def list_for_exam(
        self,
        exam_id: int,
        question_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> list[StudentResponse]:
        from apps.domains.submissions.models import StudentResponse as ResponseModel

        qs = ResponseModel.objects.filter(exam_id=exam_id)
        if question_id is not None:
            qs = qs.filter(question_id=question_id)
        if student_id is not None:
            qs = qs.filter(student_id=student_id)
        return [_response_to_entity(m) for m in qs.order_by("submitted_at", "id")]

    def student_ids(self, exam_id: int) -> list[int]:
        from apps.domains.submissions.models import StudentResponse as ResponseModel

        return list(
            ResponseModel.objects.filter(exam_id=exam_id)
            .order_by("student_id")
            .values_list("student_id", flat=True)
            .distinct()
        )

    def totals_by_student(self, exam_id: int) -> dict[int, Decimal]:
        from django.db.models import Sum
        from apps.domains.submissions.models import StudentResponse as ResponseModel

        rows = (
            ResponseModel.objects.filter(exam_id=exam_id)
            .values("student_id")
            .annotate(total=Sum("marks_obtained"))
            .order_by("student_id")
        )
        return {int(r["student_id"]): Decimal(r["total"] or 0) for r in rows}


# -------------------------------------------------
# GradingRecord (append-only)
# -------------------------------------------------
class DjangoGradingRecordRepository:
    """GradingRecordRepository 구현. update는 status 전이만 허용."""

    def append(self, record: GradingRecord) -> GradingRecord:
        from apps.domains.results.models import GradingRecord as GradingRecordModel

        m = GradingRecordModel.objects.create(
            response_id=record.response_id,
            question_id=record.question_id,
            student_id=record.student_id,
            graded_by_teacher_id=record.graded_by_teacher_id,
            marks_obtained=record.marks_obtained,
            feedback=record.feedback,
            comment=record.comment,
            is_partial_credit=record.is_partial_credit,
            status=record.status.value,
            graded_at=record.graded_at,
            regrade_from_id=record.regrade_from,
            regrade_reason=record.regrade_reason,
            regraded_at=record.regraded_at,
        )
        return _record_to_entity(m)

    def mark_historical(self, record: GradingRecord) -> None:
        from apps.domains.results.models import GradingRecord as GradingRecordModel

        if record.status == GradingStatus.GRADED:
            raise ValueError("mark_historical requires a historical status")
        updated = GradingRecordModel.objects.filter(
            id=record.record_id,
            status=GradingRecordModel.Status.GRADED,
        ).update(status=record.status.value)
        if updated != 1:
            raise ValueError(f"GradingRecord {record.record_id} is not current")

    def current_for_update(self, response_id: int) -> Optional[GradingRecord]:
        from apps.domains.results.models import GradingRecord as GradingRecordModel

        m = (
            GradingRecordModel.objects.select_for_update()
            .filter(response_id=response_id, status=GradingRecordModel.Status.GRADED)
            .first()
        )
        return _record_to_entity(m)

    def current_for_responses(self, response_ids: list[int]) -> dict[int, GradingRecord]:
        from apps.domains.results.models import GradingRecord as GradingRecordModel

        if not response_ids:
            return {}
        qs = GradingRecordModel.objects.filter(
            response_id__in=list(response_ids),
            status=GradingRecordModel.Status.GRADED,
        )
        return {m.response_id: _record_to_entity(m) for m in qs}

    def history(self, response_id: int) -> list[GradingRecord]:
        from apps.domains.results.models import GradingRecord as GradingRecordModel

        qs = GradingRecordModel.objects.filter(response_id=response_id).order_by("-graded_at", "-id")
        return [_record_to_entity(m) for m in qs]


# -------------------------------------------------
# Result
# -------------------------------------------------
class DjangoResultRepository:
    """ResultRepository 구현."""

    def get(self, exam_id: int, student_id: int) -> Optional[Result]:
        from apps.domains.results.models import Result as ResultModel
        return _result_to_entity(ResultModel.objects.filter(exam_id=exam_id, student_id=student_id).first())

    def get_for_update(self, exam_id: int, student_id: int) -> Optional[Result]:
        from apps.domains.results.models import Result as ResultModel
        m = ResultModel.objects.select_for_update().filter(exam_id=exam_id, student_id=student_id).first()
        return _result_to_entity(m)

    def save(self, result: Result) -> Result:
        from apps.domains.results.models import Result as ResultModel

        m, _ = ResultModel.objects.update_or_create(
            exam_id=result.exam_id,
            student_id=result.student_id,
            defaults={
                "total_marks": result.total_marks,
                "percentage": result.percentage,
                "rank": result.rank,
                "status": result.status.value,
                "is_published": result.is_published,
                "evaluated_by": result.evaluated_by,
                "evaluated_at": result.evaluated_at,
                "published_at": result.published_at,
            },
        )
        return _result_to_entity(m)

    def list_for_exam(self, exam_id: int) -> list[Result]:
        from apps.domains.results.models import Result as ResultModel
        qs = ResultModel.objects.filter(exam_id=exam_id).order_by("student_id")
        return [_result_to_entity(m) for m in qs]

    def list_published_for_student(self, student_id: int) -> list[Result]:
        from apps.domains.results.models import Result as ResultModel
        qs = ResultModel.objects.filter(student_id=student_id, is_published=True).order_by("-published_at", "-id")
        return [_result_to_entity(m) for m in qs]


# -------------------------------------------------
# ExamPublication
# -------------------------------------------------
class DjangoPublicationRepository:
    """PublicationRepository 구현."""

    def get(self, exam_id: int) -> Optional[ExamPublication]:
        from apps.domains.results.models import ExamPublication as PublicationModel
        return _publication_to_entity(PublicationModel.objects.filter(exam_id=exam_id).first())

    def get_for_update(self, exam_id: int) -> Optional[ExamPublication]:
        from apps.domains.results.models import ExamPublication as PublicationModel
        m = PublicationModel.objects.select_for_update().filter(exam_id=exam_id).first()
        return _publication_to_entity(m)

    def save(self, publication: ExamPublication) -> ExamPublication:
        from apps.domains.results.models import ExamPublication as PublicationModel

        m, _ = PublicationModel.objects.update_or_create(
            exam_id=publication.exam_id,
            defaults={
                "status": publication.status.value,
                "total_students": publication.total_students,
                "graded_students": publication.graded_students,
                "passing_percentage": publication.passing_percentage,
                "published_by": publication.published_by,
                "published_at": publication.published_at,
                "notes": publication.notes,
            },
        )
        return _publication_to_entity(m)
