"""
Unit of Work 포트 — 트랜잭션 경계 (Django 미사용)

모든 쓰기 use case는 `with uow:` 블록 하나 안에서 실행된다.
블록 안에서 예외가 나면 블록의 모든 쓰기가 함께 롤백된다.
"""
from __future__ import annotations

from typing import Protocol

from quizportal.application.ports.repositories import (
    ExamCatalog,
    GradingRecordRepository,
    PublicationRepository,
    ResponseRepository,
    ResultRepository,
)


class UnitOfWork(Protocol):
    """트랜잭션 단위. __enter__에서 시작, __exit__에서 commit/rollback."""

    @property
    def exams(self) -> ExamCatalog:
        ...

    @property
    def responses(self) -> ResponseRepository:
        ...

    @property
    def grading_records(self) -> GradingRecordRepository:
        ...

    @property
    def results(self) -> ResultRepository:
        ...

    @property
    def publications(self) -> PublicationRepository:
        ...

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    def rollback(self) -> None:
        ...
