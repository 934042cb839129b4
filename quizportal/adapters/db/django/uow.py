"""
Django Unit of Work — transaction.atomic 래퍼 (lazy import)

중첩 `with uow:`는 atomic 중첩(savepoint)으로 처리된다.
"""
from __future__ import annotations


class DjangoUnitOfWork:
    """Django transaction.atomic으로 트랜잭션 경계. 메서드 내부에서 Django import."""

    def __init__(self) -> None:
        self._atomics = []
        self._exams = None
        self._responses = None
        self._grading_records = None
        self._results = None
        self._publications = None

    @property
    def exams(self):
        from quizportal.adapters.db.django.repositories_exams import DjangoExamCatalog
        if self._exams is None:
            self._exams = DjangoExamCatalog()
        return self._exams

    @property
    def responses(self):
        from quizportal.adapters.db.django.repositories_grading import DjangoResponseRepository
        if self._responses is None:
            self._responses = DjangoResponseRepository()
        return self._responses

    @property
    def grading_records(self):
        from quizportal.adapters.db.django.repositories_grading import DjangoGradingRecordRepository
        if self._grading_records is None:
            self._grading_records = DjangoGradingRecordRepository()
        return self._grading_records

    @property
    def results(self):
        from quizportal.adapters.db.django.repositories_grading import DjangoResultRepository
        if self._results is None:
            self._results = DjangoResultRepository()
        return self._results

    @property
    def publications(self):
        from quizportal.adapters.db.django.repositories_grading import DjangoPublicationRepository
        if self._publications is None:
            self._publications = DjangoPublicationRepository()
        return self._publications

    def __enter__(self) -> DjangoUnitOfWork:
        from django.db import transaction
        atomic = transaction.atomic()
        atomic.__enter__()
        self._atomics.append(atomic)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._atomics:
            self._atomics.pop().__exit__(exc_type, exc_val, exc_tb)

    def rollback(self) -> None:
        from django.db import transaction
        transaction.set_rollback(True)
