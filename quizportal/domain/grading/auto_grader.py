"""
객관식 자동 채점 — 순수 함수

(QuestionInfo, answer_text)만으로 결정. 사람 개입 없음, 재제출 시 처음부터 다시 계산.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from quizportal.domain.grading.entities import QuestionInfo


@dataclass(frozen=True)
class AutoGradeOutcome:
    marks_obtained: Decimal
    is_correct: Optional[bool]


def normalize_answer(s: Optional[str]) -> str:
    return (s or "").strip()


def is_correct_choice(question: QuestionInfo, answer_text: str) -> bool:
    """선택지 텍스트 또는 선택지 id 둘 다 허용."""
    answer = normalize_answer(answer_text)
    if not answer:
        return False
    if question.correct_option_text is not None and answer == normalize_answer(question.correct_option_text):
        return True
    if question.correct_option_id is not None and answer == str(question.correct_option_id):
        return True
    return False


def auto_grade(question: QuestionInfo, answer_text: str, negative_marking: bool = False) -> AutoGradeOutcome:
    """
    객관식: 정답이면 marks, 오답이면 0 (negative_marking이면 -negative_marks).
    빈 답안은 감점 없이 0.
    객관식이 아니면 미채점 상태 (0, None) 반환.
    """
    if not question.is_objective:
        return AutoGradeOutcome(marks_obtained=Decimal("0"), is_correct=None)

    if is_correct_choice(question, answer_text):
        return AutoGradeOutcome(marks_obtained=question.marks, is_correct=True)

    penalty = Decimal("0")
    if negative_marking and normalize_answer(answer_text):
        penalty = -abs(question.negative_marks or Decimal("0"))
    return AutoGradeOutcome(marks_obtained=penalty, is_correct=False)
