# apps/domains/results/models/exam_publication.py
from django.db import models

from apps.api.common.models import BaseModel


class ExamPublication(BaseModel):
    """
    시험 단위 결과 공개 상태 (시험당 1개)

    NOT_PUBLISHED → PUBLISHED → NOT_PUBLISHED
    """

    class Status(models.TextChoices):
        NOT_PUBLISHED = "NOT_PUBLISHED", "Not published"
        PUBLISHED = "PUBLISHED", "Published"

    exam = models.OneToOneField(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="publication",
    )

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NOT_PUBLISHED)
    total_students = models.PositiveIntegerField(default=0)
    graded_students = models.PositiveIntegerField(default=0)
    passing_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=50)

    published_by = models.PositiveIntegerField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "results_exam_publication"

    def __str__(self):
        return f"ExamPublication exam={self.exam_id} ({self.status})"
