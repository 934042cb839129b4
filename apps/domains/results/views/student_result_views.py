# PATH: apps/domains/results/views/student_result_views.py
from __future__ import annotations

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from quizportal.adapters.db.django.uow import DjangoUnitOfWork
from quizportal.application.use_cases.grading import result_queries

from apps.domains.results.permissions import IsStudent
from apps.domains.results.serializers.grading import ResultDetailSerializer, ResultSerializer


class MyResultsView(APIView):
    """학생 본인의 공개된 결과 목록."""
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        results = result_queries.published_results(DjangoUnitOfWork(), request.user.id)
        return Response(ResultSerializer(results, many=True).data)


class MyExamResultView(APIView):
    """
    학생 본인 시험 결과 상세 (문항별).
    공개되지 않은 결과는 404.
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request, exam_id: int):
        detail = result_queries.result_detail(DjangoUnitOfWork(), int(exam_id), request.user.id)
        return Response(ResultDetailSerializer(detail).data)
