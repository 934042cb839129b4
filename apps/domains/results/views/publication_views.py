# PATH: apps/domains/results/views/publication_views.py
from __future__ import annotations

from django.conf import settings
from drf_yasg.utils import swagger_auto_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from quizportal.adapters.db.django.uow import DjangoUnitOfWork
from quizportal.application.use_cases.grading import publication_gate, result_queries

from apps.domains.results.permissions import IsTeacher
from apps.domains.results.serializers.grading import (
    PublicationResultSerializer,
    PublicationStatusSerializer,
    PublishSerializer,
    ResultSerializer,
    UnpublishSerializer,
)


class PublishExamView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    @swagger_auto_schema(request_body=PublishSerializer, responses={200: PublicationResultSerializer})
    def post(self, request, exam_id: int):
        serializer = PublishSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        passing = data.get("passing_percentage")
        if passing is None:
            passing = settings.GRADING_DEFAULT_PASSING_PERCENTAGE

        out = publication_gate.publish(
            DjangoUnitOfWork(),
            exam_id=int(exam_id),
            teacher_id=request.user.id,
            passing_percentage=passing,
            notes=data.get("notes"),
        )
        return Response(PublicationResultSerializer(out).data)


class UnpublishExamView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    @swagger_auto_schema(request_body=UnpublishSerializer, responses={200: PublicationResultSerializer})
    def post(self, request, exam_id: int):
        serializer = UnpublishSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        out = publication_gate.unpublish(
            DjangoUnitOfWork(),
            exam_id=int(exam_id),
            teacher_id=request.user.id,
            reason=serializer.validated_data.get("reason"),
        )
        return Response(PublicationResultSerializer(out).data)


class PublicationStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, exam_id: int):
        view = publication_gate.status_of(DjangoUnitOfWork(), int(exam_id))
        return Response(PublicationStatusSerializer(view).data)


class ExamResultsView(APIView):
    """강사: 본인 시험의 Result 전체 (석차순)."""
    permission_classes = [IsAuthenticated, IsTeacher]

    def get(self, request, exam_id: int):
        results = result_queries.exam_results(DjangoUnitOfWork(), int(exam_id), request.user.id)
        return Response(ResultSerializer(results, many=True).data)
