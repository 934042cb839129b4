# PATH: apps/domains/results/serializers/grading.py
"""
채점 / 공개 / 결과 조회 serializer

입력 serializer는 타입/필수값만 검증한다. 점수 범위 등 도메인 규칙은 채점 코어 책임.
출력 serializer는 quizportal 엔티티(dataclass)를 그대로 직렬화한다.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework import serializers


# ======================================================
# Input
# ======================================================
class GradeSerializer(serializers.Serializer):
    marks_obtained = serializers.DecimalField(max_digits=6, decimal_places=2)
    feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_partial_credit = serializers.BooleanField(required=False, allow_null=True, default=None)


class RegradeSerializer(serializers.Serializer):
    new_marks = serializers.DecimalField(max_digits=6, decimal_places=2)
    reason = serializers.CharField(required=False, allow_blank=True, default="")
    new_feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BatchGradeItemSerializer(serializers.Serializer):
    response_id = serializers.IntegerField(min_value=1)
    marks_obtained = serializers.DecimalField(max_digits=6, decimal_places=2)
    feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BatchGradeSerializer(serializers.Serializer):
    question_id = serializers.IntegerField(min_value=1)
    items = BatchGradeItemSerializer(many=True, allow_empty=False)


class PendingQuerySerializer(serializers.Serializer):
    question_id = serializers.IntegerField(required=False, min_value=1)
    student_id = serializers.IntegerField(required=False, min_value=1)
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    page_size = serializers.IntegerField(required=False, min_value=1)

    def validate_page_size(self, value):
        max_size = getattr(settings, "GRADING_MAX_PAGE_SIZE", 100)
        return min(int(value), int(max_size))


class PublishSerializer(serializers.Serializer):
    passing_percentage = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class UnpublishSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# ======================================================
# Output
# ======================================================
class GradingRecordSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="record_id")
    response_id = serializers.IntegerField()
    question_id = serializers.IntegerField()
    student_id = serializers.IntegerField()
    graded_by_teacher_id = serializers.IntegerField()
    marks_obtained = serializers.DecimalField(max_digits=6, decimal_places=2)
    status = serializers.CharField(source="status.value")
    feedback = serializers.CharField(allow_null=True)
    comment = serializers.CharField(allow_null=True)
    is_partial_credit = serializers.BooleanField()
    graded_at = serializers.DateTimeField()
    regrade_from = serializers.IntegerField(allow_null=True)
    regrade_reason = serializers.CharField(allow_null=True)
    regraded_at = serializers.DateTimeField(allow_null=True)


class StudentResponseSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="response_id")
    exam_id = serializers.IntegerField()
    question_id = serializers.IntegerField()
    student_id = serializers.IntegerField()
    answer_text = serializers.CharField()
    submitted_at = serializers.DateTimeField()
    marks_obtained = serializers.DecimalField(max_digits=6, decimal_places=2)
    is_correct = serializers.BooleanField(allow_null=True)


class QuestionInfoSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="question_id")
    question_type = serializers.CharField(source="question_type.value")
    text = serializers.CharField()
    marks = serializers.DecimalField(max_digits=6, decimal_places=2)
    negative_marks = serializers.DecimalField(max_digits=6, decimal_places=2)


class PendingItemSerializer(serializers.Serializer):
    response = StudentResponseSerializer()
    question = QuestionInfoSerializer()


class ResponseForGradingSerializer(serializers.Serializer):
    response = StudentResponseSerializer()
    question = QuestionInfoSerializer()
    current = GradingRecordSerializer(allow_null=True)
    is_graded = serializers.BooleanField()


class QuestionGradingStatsSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    question_type = serializers.CharField()
    max_marks = serializers.DecimalField(max_digits=6, decimal_places=2)
    total_responses = serializers.IntegerField()
    graded_responses = serializers.IntegerField()
    pending_responses = serializers.IntegerField()
    average_marks = serializers.DecimalField(max_digits=6, decimal_places=2)


class GradingStatsSerializer(serializers.Serializer):
    exam_id = serializers.IntegerField()
    total_questions = serializers.IntegerField()
    total_students = serializers.IntegerField(source="completeness.total_students")
    graded_students = serializers.IntegerField(source="completeness.graded_students")
    pending_responses = serializers.IntegerField(source="completeness.pending_responses")
    grading_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, source="completeness.progress_percent"
    )
    questions = QuestionGradingStatsSerializer(many=True)


class ResultSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="result_id")
    exam_id = serializers.IntegerField()
    student_id = serializers.IntegerField()
    total_marks = serializers.DecimalField(max_digits=8, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=6, decimal_places=2)
    rank = serializers.IntegerField(allow_null=True)
    status = serializers.CharField(source="status.value")
    is_published = serializers.BooleanField()
    evaluated_by = serializers.IntegerField(allow_null=True)
    evaluated_at = serializers.DateTimeField(allow_null=True)
    published_at = serializers.DateTimeField(allow_null=True)


class QuestionBreakdownSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    question_type = serializers.CharField()
    question_text = serializers.CharField()
    max_marks = serializers.DecimalField(max_digits=6, decimal_places=2)
    answer_text = serializers.CharField(allow_null=True)
    correct_answer = serializers.CharField(allow_null=True)
    marks_obtained = serializers.DecimalField(max_digits=6, decimal_places=2)
    is_correct = serializers.BooleanField(allow_null=True)
    feedback = serializers.CharField(allow_null=True)


class ResultDetailSerializer(serializers.Serializer):
    result = ResultSerializer()
    exam_title = serializers.CharField()
    exam_total_marks = serializers.DecimalField(max_digits=8, decimal_places=2)
    passing_percentage = serializers.DecimalField(max_digits=5, decimal_places=2, allow_null=True)
    is_passed = serializers.BooleanField(allow_null=True)
    correct_count = serializers.IntegerField()
    wrong_count = serializers.IntegerField()
    unanswered_count = serializers.IntegerField()
    questions = QuestionBreakdownSerializer(many=True)


class PublicationResultSerializer(serializers.Serializer):
    exam_id = serializers.IntegerField()
    is_published = serializers.BooleanField()
    total_students = serializers.IntegerField()
    graded_students = serializers.IntegerField()
    results_affected = serializers.IntegerField()
    passing_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    published_at = serializers.DateTimeField(allow_null=True)
    notes = serializers.CharField(allow_null=True)


class PublicationStatusSerializer(serializers.Serializer):
    exam_id = serializers.IntegerField()
    is_published = serializers.BooleanField()
    total_students = serializers.IntegerField()
    graded_students = serializers.IntegerField()
    grading_progress_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    passing_percentage = serializers.DecimalField(max_digits=5, decimal_places=2, allow_null=True)
    published_by = serializers.IntegerField(allow_null=True)
    published_at = serializers.DateTimeField(allow_null=True)
    notes = serializers.CharField(allow_null=True)
