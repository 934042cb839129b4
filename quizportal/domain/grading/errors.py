"""
채점 도메인 오류 — 순수 파이썬

모두 호출자가 회복 가능한 오류. 저장소 예외는 감싸지 않고 그대로 전파한다.
"""
from __future__ import annotations


class GradingDomainError(Exception):
    """채점/결과 도메인 규칙 위반."""
    code = "grading_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GradingDomainError):
    """범위를 벗어난 점수, 누락된 필수 값 등."""
    code = "validation_error"


class Conflict(GradingDomainError):
    """현재 상태에서 허용되지 않는 전이 (공개된 시험 수정, 미채점 상태 공개 등)."""
    code = "conflict"


class NotFound(GradingDomainError):
    code = "not_found"


class Unauthorized(GradingDomainError):
    """시험 소유자가 아님 / 본인 응답이 아님."""
    code = "unauthorized"
