# PATH: apps/domains/submissions/views/response_views.py
"""
학생 답안 제출 API

- submit / finalize / withdraw는 quizportal ResponseStore 호출
- 강사용 응답 목록은 읽기 전용 ORM 조회 (django-filter)
"""
from __future__ import annotations

from drf_yasg.utils import swagger_auto_schema
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from quizportal.adapters.db.django.uow import DjangoUnitOfWork
from quizportal.application.use_cases.grading import response_store

from apps.domains.results.permissions import IsStudent, IsTeacher
from apps.domains.results.serializers.grading import ResultSerializer, StudentResponseSerializer
from apps.domains.submissions.filters import StudentResponseFilter
from apps.domains.submissions.models import StudentResponse
from apps.domains.submissions.serializers.student_response import (
    StudentResponseModelSerializer,
    SubmitResponseSerializer,
)


class SubmitResponseView(APIView):
    """
    POST /submissions/exams/<exam_id>/responses/
    같은 문항 재제출은 덮어쓰기 (200), 첫 제출은 201.
    """
    permission_classes = [IsAuthenticated, IsStudent]

    @swagger_auto_schema(request_body=SubmitResponseSerializer, responses={201: StudentResponseSerializer})
    def post(self, request, exam_id: int):
        serializer = SubmitResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        existed = StudentResponse.objects.filter(
            exam_id=int(exam_id),
            question_id=data["question_id"],
            student_id=request.user.id,
        ).exists()

        response = response_store.submit(
            DjangoUnitOfWork(),
            exam_id=int(exam_id),
            question_id=data["question_id"],
            student_id=request.user.id,
            answer_text=data["answer_text"],
        )
        return Response(
            StudentResponseSerializer(response).data,
            status=status.HTTP_200_OK if existed else status.HTTP_201_CREATED,
        )


class FinalizeAttemptView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    @swagger_auto_schema(request_body=None, responses={201: ResultSerializer})
    def post(self, request, exam_id: int):
        result = response_store.finalize(DjangoUnitOfWork(), int(exam_id), request.user.id)
        return Response(ResultSerializer(result).data, status=status.HTTP_201_CREATED)


class WithdrawResponseView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def delete(self, request, response_id: int):
        response_store.withdraw(DjangoUnitOfWork(), int(response_id), request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ExamResponsesListView(ListAPIView):
    """
    GET /submissions/exams/<exam_id>/responses/list/?question=&student=&is_correct=
    강사 본인 시험의 응답만 조회.
    """
    permission_classes = [IsAuthenticated, IsTeacher]
    serializer_class = StudentResponseModelSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = StudentResponseFilter

    def get_queryset(self):
        return (
            StudentResponse.objects.filter(
                exam_id=int(self.kwargs["exam_id"]),
                exam__owner_teacher_id=self.request.user.id,
            )
            .order_by("submitted_at", "id")
        )
