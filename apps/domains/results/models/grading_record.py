# apps/domains/results/models/grading_record.py
from django.db import models

from apps.api.common.models import BaseModel


class GradingRecord(BaseModel):
    """
    수동 채점 원장 (append-only)

    ✅ 설계 고정 사항
    --------------------------------------------------
    1) 새 채점/재채점은 항상 새 row.
       기존 row는 status만 REGRADED/INVALIDATED로 바뀐다.
    2) 응답당 status=GRADED row는 최대 1개 (partial unique constraint).
    3) regrade_from: 재채점으로 대체된 직전 기록.
    """

    class Status(models.TextChoices):
        GRADED = "GRADED", "Graded"
        REGRADED = "REGRADED", "Regraded"
        INVALIDATED = "INVALIDATED", "Invalidated"

    response = models.ForeignKey(
        "submissions.StudentResponse",
        on_delete=models.CASCADE,
        related_name="grading_records",
    )
    question = models.ForeignKey(
        "exams.ExamQuestion",
        on_delete=models.CASCADE,
        related_name="grading_records",
    )
    student_id = models.PositiveIntegerField()
    graded_by_teacher_id = models.PositiveIntegerField()

    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2)
    feedback = models.TextField(null=True, blank=True)
    comment = models.TextField(null=True, blank=True)
    is_partial_credit = models.BooleanField(default=False)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.GRADED)
    graded_at = models.DateTimeField()

    regrade_from = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="regraded_by",
    )
    regrade_reason = models.TextField(null=True, blank=True)
    regraded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "results_grading_record"
        ordering = ["-graded_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["response"],
                condition=models.Q(status="GRADED"),
                name="uniq_current_grading_record_per_response",
            ),
        ]
        indexes = [
            models.Index(fields=["response", "status"], name="results_grading_resp_st_idx"),
        ]

    def __str__(self):
        return f"GradingRecord response={self.response_id} marks={self.marks_obtained} ({self.status})"
