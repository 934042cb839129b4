# PATH: apps/domains/submissions/serializers/student_response.py
from __future__ import annotations

from rest_framework import serializers

from apps.domains.submissions.models import StudentResponse


class SubmitResponseSerializer(serializers.Serializer):
    question_id = serializers.IntegerField(min_value=1)
    answer_text = serializers.CharField(allow_blank=True, trim_whitespace=False)


class StudentResponseModelSerializer(serializers.ModelSerializer):
    class Meta:
        model = StudentResponse
        fields = [
            "id",
            "exam",
            "question",
            "student_id",
            "answer_text",
            "submitted_at",
            "marks_obtained",
            "is_correct",
        ]
        read_only_fields = fields
