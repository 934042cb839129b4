# PATH: apps/api/common/models.py
from django.db import models


class BaseModel(models.Model):
    """
    채점 도메인 모델 공통 베이스 (추상)

    - created_at / updated_at 자동 기록
    - Result / ExamPublication 엔티티의 타임스탬프 원천
    """
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
