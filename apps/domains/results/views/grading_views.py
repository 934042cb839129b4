# PATH: apps/domains/results/views/grading_views.py
"""
강사용 수동 채점 API

- 뷰는 입력 형식만 검증하고 quizportal 채점 코어를 호출한다
- 도메인 오류 → HTTP 매핑은 apps.api.common.exceptions 책임
"""
from __future__ import annotations

import logging

from django.conf import settings
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from quizportal.adapters.db.django.uow import DjangoUnitOfWork
from quizportal.application.use_cases.grading import grading_ledger
from quizportal.application.use_cases.grading.grading_ledger import GradeItem

from apps.domains.results.permissions import IsTeacher
from apps.domains.results.serializers.grading import (
    BatchGradeSerializer,
    GradeSerializer,
    GradingRecordSerializer,
    GradingStatsSerializer,
    PendingItemSerializer,
    PendingQuerySerializer,
    RegradeSerializer,
    ResponseForGradingSerializer,
)

logger = logging.getLogger(__name__)


class PendingResponsesView(APIView):
    """
    GET /results/exams/<exam_id>/grading/pending/?question_id=&student_id=&page=&page_size=
    """
    permission_classes = [IsAuthenticated, IsTeacher]

    @swagger_auto_schema(query_serializer=PendingQuerySerializer)
    def get(self, request, exam_id: int):
        query = PendingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        page = grading_ledger.pending_for(
            DjangoUnitOfWork(),
            exam_id=int(exam_id),
            question_id=params.get("question_id"),
            student_id=params.get("student_id"),
            page=params.get("page", 1),
            page_size=params.get("page_size") or settings.GRADING_PAGE_SIZE,
        )
        return Response(
            {
                "count": page.total,
                "page": page.page,
                "page_size": page.page_size,
                "total_pages": page.total_pages,
                "results": PendingItemSerializer(page.items, many=True).data,
            }
        )


class ResponseForGradingView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    def get(self, request, response_id: int):
        view = grading_ledger.response_for_grading(DjangoUnitOfWork(), int(response_id), request.user.id)
        return Response(ResponseForGradingSerializer(view).data)


class GradeResponseView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    @swagger_auto_schema(request_body=GradeSerializer, responses={201: GradingRecordSerializer})
    def post(self, request, response_id: int):
        serializer = GradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = grading_ledger.grade_single(
            DjangoUnitOfWork(),
            response_id=int(response_id),
            teacher_id=request.user.id,
            marks_obtained=data["marks_obtained"],
            feedback=data.get("feedback"),
            comment=data.get("comment"),
            is_partial_credit=data.get("is_partial_credit"),
        )
        return Response(GradingRecordSerializer(record).data, status=status.HTTP_201_CREATED)


class RegradeResponseView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    @swagger_auto_schema(request_body=RegradeSerializer, responses={201: GradingRecordSerializer})
    def post(self, request, response_id: int):
        serializer = RegradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = grading_ledger.regrade(
            DjangoUnitOfWork(),
            response_id=int(response_id),
            teacher_id=request.user.id,
            new_marks=data["new_marks"],
            reason=data.get("reason"),
            new_feedback=data.get("new_feedback"),
            comment=data.get("comment"),
        )
        return Response(GradingRecordSerializer(record).data, status=status.HTTP_201_CREATED)


class GradingHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    def get(self, request, response_id: int):
        records = grading_ledger.history(DjangoUnitOfWork(), int(response_id), request.user.id)
        return Response(GradingRecordSerializer(records, many=True).data)


class BatchGradeView(APIView):
    """
    best-effort: 항목별 실패는 fail_count / errors로 보고 (HTTP 200)
    """
    permission_classes = [IsAuthenticated, IsTeacher]

    @swagger_auto_schema(request_body=BatchGradeSerializer)
    def post(self, request, exam_id: int):
        serializer = BatchGradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = [
            GradeItem(
                response_id=item["response_id"],
                marks_obtained=item["marks_obtained"],
                feedback=item.get("feedback"),
                comment=item.get("comment"),
            )
            for item in data["items"]
        ]
        report = grading_ledger.batch_grade(
            DjangoUnitOfWork(),
            exam_id=int(exam_id),
            question_id=data["question_id"],
            teacher_id=request.user.id,
            items=items,
        )

        errors = [
            {"response_id": item.response_id, "detail": outcome.message, "code": outcome.code}
            for item, outcome in zip(items, report.outcomes)
            if not outcome.ok
        ]
        logger.info(
            "batch grading on exam %s by teacher %s: %s ok, %s failed",
            exam_id, request.user.id, report.success_count, report.fail_count,
        )
        return Response(
            {
                "success_count": report.success_count,
                "fail_count": report.fail_count,
                "errors": errors,
            }
        )


class GradingStatsView(APIView):
    permission_classes = [IsAuthenticated, IsTeacher]

    def get(self, request, exam_id: int):
        stats = grading_ledger.grading_stats(DjangoUnitOfWork(), int(exam_id), request.user.id)
        return Response(GradingStatsSerializer(stats).data)
