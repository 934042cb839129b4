import django_filters
from .models import StudentResponse


class StudentResponseFilter(django_filters.FilterSet):
    """
    StudentResponse 기본 필터
    - question / student 기준 조회
    - is_correct: 객관식 정오, 수동채점 결과 mirror
    """

    question = django_filters.NumberFilter(field_name="question_id")
    student = django_filters.NumberFilter(field_name="student_id")
    is_correct = django_filters.BooleanFilter()

    class Meta:
        model = StudentResponse
        fields = [
            "question",
            "student",
            "is_correct",
        ]
