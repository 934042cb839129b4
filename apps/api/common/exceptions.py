"""
DRF 예외 핸들러 — 채점 도메인 오류 → HTTP 응답

ValidationError → 400, Unauthorized → 403, NotFound → 404, Conflict → 409
그 외 예외는 DRF 기본 핸들러로 위임.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from quizportal.domain.grading.errors import (
    Conflict,
    GradingDomainError,
    NotFound,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (Unauthorized, status.HTTP_403_FORBIDDEN),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
)


def status_for(exc: GradingDomainError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def grading_exception_handler(exc, context):
    if isinstance(exc, GradingDomainError):
        view = context.get("view")
        logger.warning(
            "%s rejected: %s (%s)",
            view.__class__.__name__ if view is not None else "request",
            exc.message,
            exc.code,
        )
        return Response({"detail": exc.message, "code": exc.code}, status=status_for(exc))
    return exception_handler(exc, context)
