"""
Exam Catalog — Django ORM 구현 (메서드 내부에서만 apps.domains.exams import)

채점 코어에는 읽기 전용 스냅샷(ExamInfo / QuestionInfo)만 넘긴다.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from quizportal.domain.grading.entities import ExamInfo, QuestionInfo, QuestionType


def _question_to_entity(m) -> Optional[QuestionInfo]:
    if m is None:
        return None
    correct = None
    if m.question_type == QuestionType.OBJECTIVE.value:
        # prefetch된 options 사용
        correct = next((o for o in m.options.all() if o.is_correct), None)
    return QuestionInfo(
        question_id=m.id,
        exam_id=m.exam_id,
        question_type=QuestionType(m.question_type),
        marks=Decimal(m.marks),
        negative_marks=Decimal(m.negative_marks or 0),
        correct_option_id=correct.id if correct is not None else None,
        correct_option_text=correct.text if correct is not None else None,
        text=m.text or "",
    )


class DjangoExamCatalog:
    """ExamCatalog 구현."""

    def get_exam(self, exam_id: int) -> Optional[ExamInfo]:
        from django.db.models import Sum
        from apps.domains.exams.models import Exam

        m = Exam.objects.filter(id=exam_id).first()
        if m is None:
            return None

        total = m.total_marks
        if total is None:
            total = m.questions.aggregate(s=Sum("marks"))["s"] or Decimal("0")

        return ExamInfo(
            exam_id=m.id,
            owner_teacher_id=m.owner_teacher_id,
            total_marks=Decimal(total),
            is_open=m.is_open(),
            has_negative_marking=m.has_negative_marking,
            allow_negative_total=m.allow_negative_total,
            title=m.title,
        )

    def get_question(self, question_id: int) -> Optional[QuestionInfo]:
        from apps.domains.exams.models import ExamQuestion

        m = ExamQuestion.objects.prefetch_related("options").filter(id=question_id).first()
        return _question_to_entity(m)

    def list_questions(self, exam_id: int) -> list[QuestionInfo]:
        from apps.domains.exams.models import ExamQuestion

        qs = ExamQuestion.objects.prefetch_related("options").filter(exam_id=exam_id).order_by("number", "id")
        return [_question_to_entity(m) for m in qs]
