from django.db import models

from apps.api.common.models import BaseModel
from .exam import Exam


class ExamQuestion(BaseModel):
    """
    시험 문항 정의
    """

    class QuestionType(models.TextChoices):
        OBJECTIVE = "OBJECTIVE", "Objective"
        SHORT_ANSWER = "SHORT_ANSWER", "Short answer"
        SUBJECTIVE = "SUBJECTIVE", "Subjective"

    exam = models.ForeignKey(
        Exam,
        on_delete=models.CASCADE,
        related_name="questions",
    )

    number = models.PositiveIntegerField()  # 1번, 2번 ...
    text = models.TextField(blank=True)
    question_type = models.CharField(
        max_length=20,
        choices=QuestionType.choices,
        default=QuestionType.OBJECTIVE,
    )

    marks = models.DecimalField(max_digits=6, decimal_places=2, default=1)
    negative_marks = models.DecimalField(max_digits=6, decimal_places=2, default=0)

    class Meta:
        db_table = "exams_question"
        unique_together = ("exam", "number")
        ordering = ["number"]

    def __str__(self):
        return f"{self.exam} Q{self.number}"


class QuestionOption(BaseModel):
    """
    객관식 선택지. 문항당 정답(is_correct=True)은 1개.
    """

    question = models.ForeignKey(
        ExamQuestion,
        on_delete=models.CASCADE,
        related_name="options",
    )
    text = models.CharField(max_length=500)
    is_correct = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "exams_question_option"
        ordering = ["order", "id"]

    def __str__(self):
        return f"{self.question} ({self.order}) {self.text}"
