"""
채점/결과 도메인 엔티티 — 순수 파이썬 (Django/ORM 미사용)

상태 전이 규칙은 엔티티 메서드로 표현.
문자열 상태값은 모두 닫힌 Enum으로 고정한다.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class QuestionType(str, Enum):
    """문항 유형 (apps.domains.exams ExamQuestion.QuestionType choices와 동기화)."""
    OBJECTIVE = "OBJECTIVE"
    SHORT_ANSWER = "SHORT_ANSWER"
    SUBJECTIVE = "SUBJECTIVE"


class GradingStatus(str, Enum):
    """
    GradingRecord 상태.
    GRADED만 현재(유효) 기록. REGRADED/INVALIDATED는 이력으로만 남는다.
    """
    GRADED = "GRADED"
    REGRADED = "REGRADED"
    INVALIDATED = "INVALIDATED"


class ResultStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    GRADED = "GRADED"


class PublicationStatus(str, Enum):
    NOT_PUBLISHED = "NOT_PUBLISHED"
    PUBLISHED = "PUBLISHED"


@dataclass(frozen=True)
class ExamInfo:
    """시험 정책 스냅샷 (exams 도메인에서 읽기 전용으로 제공)."""
    exam_id: int
    owner_teacher_id: int
    total_marks: Decimal
    is_open: bool
    has_negative_marking: bool = False
    allow_negative_total: bool = False
    title: str = ""


@dataclass(frozen=True)
class QuestionInfo:
    question_id: int
    exam_id: int
    question_type: QuestionType
    marks: Decimal
    negative_marks: Decimal = Decimal("0")
    correct_option_id: Optional[int] = None
    correct_option_text: Optional[str] = None
    text: str = ""

    @property
    def is_objective(self) -> bool:
        return self.question_type == QuestionType.OBJECTIVE


@dataclass
class StudentResponse:
    """
    (exam, question, student) 당 1개.
    marks_obtained / is_correct는 AutoGrader 또는 GradingLedger가 채우는 mirror 필드.
    """
    exam_id: int
    question_id: int
    student_id: int
    answer_text: str
    submitted_at: datetime
    marks_obtained: Decimal = Decimal("0")
    is_correct: Optional[bool] = None
    response_id: Optional[int] = None

    def apply_grade(self, marks: Decimal, is_correct: Optional[bool]) -> None:
        self.marks_obtained = marks
        self.is_correct = is_correct

    def clear_grade(self) -> None:
        self.marks_obtained = Decimal("0")
        self.is_correct = None


@dataclass(frozen=True)
class GradingRecord:
    """
    수동 채점 기록 (append-only).

    - 새 채점/재채점은 항상 새 레코드로 추가
    - 기존 레코드는 status만 이력 상태로 바뀌고 절대 삭제되지 않음
    - regrade_from: 대체된 직전 레코드 id
    """
    response_id: int
    question_id: int
    student_id: int
    graded_by_teacher_id: int
    marks_obtained: Decimal
    graded_at: datetime
    status: GradingStatus = GradingStatus.GRADED
    feedback: Optional[str] = None
    comment: Optional[str] = None
    is_partial_credit: bool = False
    regrade_from: Optional[int] = None
    regrade_reason: Optional[str] = None
    regraded_at: Optional[datetime] = None
    record_id: Optional[int] = None

    @property
    def is_current(self) -> bool:
        return self.status == GradingStatus.GRADED

    def superseded(self, status: GradingStatus) -> "GradingRecord":
        """현재 기록 → 이력 기록. 이미 이력이면 ValueError."""
        if not self.is_current:
            raise ValueError(f"GradingRecord {self.record_id} is already historical: status={self.status}")
        if status == GradingStatus.GRADED:
            raise ValueError("superseded status must be historical")
        return replace(self, status=status)


@dataclass
class Result:
    """(exam, student) 당 1개. 공개 이후에는 값이 고정된다 (unpublish는 노출 여부만 변경)."""
    exam_id: int
    student_id: int
    total_marks: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")
    rank: Optional[int] = None
    status: ResultStatus = ResultStatus.PENDING
    is_published: bool = False
    evaluated_by: Optional[int] = None
    evaluated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    result_id: Optional[int] = None

    def apply_totals(self, total_marks: Decimal, percentage: Decimal, rank: int, now: datetime) -> None:
        self.total_marks = total_marks
        self.percentage = percentage
        self.rank = rank
        self.updated_at = now

    def publish(self, now: datetime) -> None:
        self.is_published = True
        self.published_at = now
        self.updated_at = now

    def hide(self, now: datetime) -> None:
        self.is_published = False
        self.updated_at = now


@dataclass
class ExamPublication:
    """
    시험 단위 공개 상태 머신.

    NOT_PUBLISHED → PUBLISHED → NOT_PUBLISHED 외 전이 없음.
    """
    exam_id: int
    status: PublicationStatus = PublicationStatus.NOT_PUBLISHED
    total_students: int = 0
    graded_students: int = 0
    passing_percentage: Decimal = Decimal("50")
    published_by: Optional[int] = None
    published_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    publication_id: Optional[int] = None

    @property
    def is_published(self) -> bool:
        return self.status == PublicationStatus.PUBLISHED

    def can_publish(self) -> bool:
        return self.status == PublicationStatus.NOT_PUBLISHED

    def publish(
        self,
        teacher_id: int,
        passing_percentage: Decimal,
        total_students: int,
        graded_students: int,
        notes: Optional[str],
        now: datetime,
    ) -> None:
        """NOT_PUBLISHED → PUBLISHED. 규칙 위반 시 ValueError."""
        if not self.can_publish():
            raise ValueError(f"Cannot publish exam {self.exam_id}: status={self.status}")
        if graded_students != total_students:
            raise ValueError(
                f"Cannot publish exam {self.exam_id}: graded={graded_students} total={total_students}"
            )
        self.status = PublicationStatus.PUBLISHED
        self.total_students = total_students
        self.graded_students = graded_students
        self.passing_percentage = passing_percentage
        self.published_by = teacher_id
        self.published_at = now
        self.notes = notes
        self.updated_at = now

    def unpublish(self, reason: Optional[str], now: datetime) -> None:
        """PUBLISHED → NOT_PUBLISHED."""
        if not self.is_published:
            raise ValueError(f"Cannot unpublish exam {self.exam_id}: status={self.status}")
        self.status = PublicationStatus.NOT_PUBLISHED
        self.published_by = None
        self.published_at = None
        self.notes = reason
        self.updated_at = now


@dataclass(frozen=True)
class Page:
    """페이지 단위 조회 결과."""
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size
