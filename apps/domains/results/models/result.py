# apps/domains/results/models/result.py
from django.db import models

from apps.api.common.models import BaseModel


class Result(BaseModel):
    """
    학생 x 시험 최종 결과 (집계 snapshot)

    - 응시 종료(finalize) 또는 결과 공개 시 생성
    - 공개 이전에는 채점 변경마다 재계산
    - 공개 이후 값은 고정, unpublish는 is_published만 되돌림
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        COMPLETED = "COMPLETED", "Completed"
        GRADED = "GRADED", "Graded"

    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="results",
    )
    student_id = models.PositiveIntegerField(db_index=True)

    total_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    percentage = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    rank = models.PositiveIntegerField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    is_published = models.BooleanField(default=False)

    evaluated_by = models.PositiveIntegerField(null=True, blank=True)
    evaluated_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "results_result"
        unique_together = ("exam", "student_id")
        ordering = ["rank", "student_id"]
        indexes = [
            models.Index(fields=["exam", "total_marks"], name="results_result_exam_tot_idx"),
            models.Index(fields=["student_id", "is_published"], name="results_result_stu_pub_idx"),
        ]

    def __str__(self):
        return f"Result exam={self.exam_id} student={self.student_id} total={self.total_marks}"
