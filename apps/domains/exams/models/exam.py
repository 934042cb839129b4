from django.db import models
from django.utils import timezone

from apps.api.common.models import BaseModel


class Exam(BaseModel):
    """
    시험 정의 (메타 + 채점 정책)

    - owner_teacher_id: 출제 강사 (인증 계층에서 확인된 id)
    - total_marks: 비워두면 문항 배점 합계 사용
    - schedule_start / schedule_end: 비어 있으면 해당 방향 제한 없음
    """

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    owner_teacher_id = models.PositiveIntegerField(db_index=True)

    total_marks = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)

    # 감점 정책
    has_negative_marking = models.BooleanField(default=False)
    allow_negative_total = models.BooleanField(default=False)

    schedule_start = models.DateTimeField(null=True, blank=True)
    schedule_end = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "exams_exam"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def is_open(self, now=None) -> bool:
        if not self.is_active:
            return False
        now = now or timezone.now()
        if self.schedule_start and now < self.schedule_start:
            return False
        if self.schedule_end and now > self.schedule_end:
            return False
        return True
