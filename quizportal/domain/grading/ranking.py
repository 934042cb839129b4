"""
총점 / 백분율 / 석차 계산 — 순수 파이썬

석차는 표준 경쟁 순위(1224): 나보다 총점이 큰 학생 수 + 1.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

_HUNDRED = Decimal("100")
_TWO_PLACES = Decimal("0.01")


def floor_total(total: Decimal, allow_negative_total: bool = False) -> Decimal:
    if allow_negative_total:
        return total
    return max(total, Decimal("0"))


def compute_percentage(total_marks: Decimal, exam_total_marks: Decimal) -> Decimal:
    """exam_total_marks가 0이면 0."""
    if not exam_total_marks:
        return Decimal("0.00")
    pct = (Decimal(total_marks) / Decimal(exam_total_marks)) * _HUNDRED
    return pct.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def competition_rank(total_marks: Decimal, all_totals: Iterable[Decimal]) -> int:
    return 1 + sum(1 for other in all_totals if other > total_marks)


def rank_all(totals: Mapping[int, Decimal]) -> dict[int, int]:
    """student_id → rank. 같은 스냅샷에서 계산되므로 서로 일관적."""
    values = list(totals.values())
    return {student_id: competition_rank(total, values) for student_id, total in totals.items()}


def grading_progress(graded_students: int, total_students: int) -> Decimal:
    if total_students <= 0:
        return Decimal("0.00")
    pct = Decimal(graded_students) * _HUNDRED / Decimal(total_students)
    return pct.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
