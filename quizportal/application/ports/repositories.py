"""
Repository 포트 — 영속화 추상화 (Django/ORM 미사용)

엔티티 간 관계는 객체 그래프가 아니라 좁은 조회 인터페이스로만 노출한다.
select_for_update/atomic은 어댑터에서 수행.
"""
from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import Optional, Protocol

from quizportal.domain.grading.entities import (
    ExamInfo,
    ExamPublication,
    GradingRecord,
    Page,
    QuestionInfo,
    Result,
    StudentResponse,
)


class ExamCatalog(Protocol):
    """시험/문항 정의 읽기 전용 (exams 도메인 소유)."""

    @abstractmethod
    def get_exam(self, exam_id: int) -> Optional[ExamInfo]:
        ...

    @abstractmethod
    def get_question(self, question_id: int) -> Optional[QuestionInfo]:
        ...

    @abstractmethod
    def list_questions(self, exam_id: int) -> list[QuestionInfo]:
        ...


class ResponseRepository(Protocol):
    """StudentResponse 영속화. (exam, question, student) 유일."""

    @abstractmethod
    def get(self, response_id: int) -> Optional[StudentResponse]:
        ...

    @abstractmethod
    def get_for_update(self, response_id: int) -> Optional[StudentResponse]:
        """row lock 포함. 호출자가 UoW 트랜잭션 안에 있어야 함."""
        ...

    @abstractmethod
    def find_for_update(self, exam_id: int, question_id: int, student_id: int) -> Optional[StudentResponse]:
        ...

    @abstractmethod
    def add(self, response: StudentResponse) -> StudentResponse:
        """
        insert. 동시 제출로 유일 제약 위반 시 이미 존재하는 행에 덮어쓰고 그 행을 반환.
        response_id가 채워진 엔티티 반환.
        """
        ...

    @abstractmethod
    def save(self, response: StudentResponse) -> StudentResponse:
        ...

    @abstractmethod
    def delete(self, response_id: int) -> None:
        """GradingRecord는 cascade 삭제."""
        ...

    @abstractmethod
    def list_for_exam(
        self,
        exam_id: int,
        question_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> list[StudentResponse]:
        """submitted_at, response_id 오름차순."""
        ...

    @abstractmethod
    def student_ids(self, exam_id: int) -> list[int]:
        """응답이 1개 이상 있는 학생 id (오름차순)."""
        ...

    @abstractmethod
    def totals_by_student(self, exam_id: int) -> dict[int, Decimal]:
        """student_id → marks_obtained 합계. 한 번의 조회(스냅샷)."""
        ...


class GradingRecordRepository(Protocol):
    """GradingRecord append-only 원장. 삭제 메서드 없음."""

    @abstractmethod
    def append(self, record: GradingRecord) -> GradingRecord:
        ...

    @abstractmethod
    def mark_historical(self, record: GradingRecord) -> None:
        """status 변경만 허용 (GRADED → REGRADED/INVALIDATED)."""
        ...

    @abstractmethod
    def current_for_update(self, response_id: int) -> Optional[GradingRecord]:
        ...

    @abstractmethod
    def current_for_responses(self, response_ids: list[int]) -> dict[int, GradingRecord]:
        """response_id → 현재(GRADED) 기록."""
        ...

    @abstractmethod
    def history(self, response_id: int) -> list[GradingRecord]:
        """최신순 (graded_at, record_id 내림차순)."""
        ...


class ResultRepository(Protocol):

    @abstractmethod
    def get(self, exam_id: int, student_id: int) -> Optional[Result]:
        ...

    @abstractmethod
    def get_for_update(self, exam_id: int, student_id: int) -> Optional[Result]:
        ...

    @abstractmethod
    def save(self, result: Result) -> Result:
        """insert/update. result_id가 채워진 엔티티 반환."""
        ...

    @abstractmethod
    def list_for_exam(self, exam_id: int) -> list[Result]:
        ...

    @abstractmethod
    def list_published_for_student(self, student_id: int) -> list[Result]:
        ...


class PublicationRepository(Protocol):

    @abstractmethod
    def get(self, exam_id: int) -> Optional[ExamPublication]:
        ...

    @abstractmethod
    def get_for_update(self, exam_id: int) -> Optional[ExamPublication]:
        ...

    @abstractmethod
    def save(self, publication: ExamPublication) -> ExamPublication:
        ...
