"""
도메인 공통: 항목 단위 처리 결과 타입 (외부 라이브러리 없음)

best-effort 일괄 처리에서 항목별 성공/실패를 예외 대신 값으로 돌려줄 때 사용.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    message: str
    code: str = "error"

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Ok[T], Err]
