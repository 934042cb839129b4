# apps/domains/submissions/models/student_response.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from apps.api.common.models import BaseModel


class StudentResponse(BaseModel):
    """
    StudentResponse = 학생 1명 x 문항 1개 답안 (유일)

    - marks_obtained / is_correct는 자동채점 또는 수동채점 결과 mirror
    - 채점 원장은 results.GradingRecord (cascade 삭제)
    """
    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="responses",
    )
    question = models.ForeignKey(
        "exams.ExamQuestion",
        on_delete=models.CASCADE,
        related_name="responses",
    )
    student_id = models.PositiveIntegerField(db_index=True)

    answer_text = models.TextField(blank=True, default="")
    submitted_at = models.DateTimeField(default=timezone.now)

    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    is_correct = models.BooleanField(null=True, blank=True)

    class Meta:
        db_table = "submissions_student_response"
        constraints = [
            models.UniqueConstraint(
                fields=["exam", "question", "student_id"],
                name="uniq_response_exam_question_student",
            ),
        ]
        indexes = [
            models.Index(fields=["exam", "student_id"], name="subm_resp_exam_student_idx"),
        ]
        ordering = ["submitted_at", "id"]

    def __str__(self) -> str:
        return f"StudentResponse(exam={self.exam_id}, q={self.question_id}, student={self.student_id})"
