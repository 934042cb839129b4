"""
결과 조회 (read side)

학생: 공개된 Result만 조회 가능.
강사: 본인 시험의 Result 전체 (공개 여부 무관).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.application.use_cases.grading.guards import require_exam, require_owner
from quizportal.domain.grading.entities import Result
from quizportal.domain.grading.errors import NotFound


@dataclass(frozen=True)
class QuestionBreakdown:
    question_id: int
    question_type: str
    question_text: str
    max_marks: Decimal
    answer_text: Optional[str]
    correct_answer: Optional[str]
    marks_obtained: Decimal
    is_correct: Optional[bool]
    feedback: Optional[str] = None


@dataclass(frozen=True)
class ResultDetail:
    result: Result
    exam_title: str
    exam_total_marks: Decimal
    passing_percentage: Optional[Decimal]
    is_passed: Optional[bool]
    correct_count: int
    wrong_count: int
    unanswered_count: int
    questions: list = field(default_factory=list)


def published_result(uow: UnitOfWork, exam_id: int, student_id: int) -> Result:
    with uow:
        result = uow.results.get(int(exam_id), int(student_id))
    if result is None or not result.is_published:
        raise NotFound(f"No published result for exam {exam_id}")
    return result


def published_results(uow: UnitOfWork, student_id: int) -> list[Result]:
    with uow:
        return uow.results.list_published_for_student(int(student_id))


def result_detail(uow: UnitOfWork, exam_id: int, student_id: int) -> ResultDetail:
    """문항별 답안/정답/점수. 공개된 결과만."""
    with uow:
        result = published_result(uow, exam_id, student_id)
        exam = require_exam(uow, exam_id)
        publication = uow.publications.get(exam.exam_id)
        questions = uow.exams.list_questions(exam.exam_id)
        responses = {
            r.question_id: r
            for r in uow.responses.list_for_exam(exam.exam_id, student_id=int(student_id))
        }
        current = uow.grading_records.current_for_responses(
            [int(r.response_id) for r in responses.values() if r.response_id is not None]
        ) if responses else {}

    rows = []
    correct = wrong = unanswered = 0
    for q in questions:
        response = responses.get(q.question_id)
        answer = response.answer_text if response is not None else None
        if response is None or not (answer or "").strip():
            unanswered += 1
        elif response.is_correct:
            correct += 1
        else:
            wrong += 1

        record = current.get(response.response_id) if response is not None else None
        rows.append(
            QuestionBreakdown(
                question_id=q.question_id,
                question_type=q.question_type.value,
                question_text=q.text,
                max_marks=q.marks,
                answer_text=answer,
                correct_answer=q.correct_option_text if q.is_objective else None,
                marks_obtained=response.marks_obtained if response is not None else Decimal("0"),
                is_correct=response.is_correct if response is not None else None,
                feedback=record.feedback if record is not None else None,
            )
        )

    passing = publication.passing_percentage if publication is not None else None
    return ResultDetail(
        result=result,
        exam_title=exam.title,
        exam_total_marks=exam.total_marks,
        passing_percentage=passing,
        is_passed=(result.percentage >= passing) if passing is not None else None,
        correct_count=correct,
        wrong_count=wrong,
        unanswered_count=unanswered,
        questions=rows,
    )


def exam_results(uow: UnitOfWork, exam_id: int, teacher_id: int) -> list[Result]:
    """석차 오름차순, 동점은 student_id 순."""
    with uow:
        exam = require_exam(uow, exam_id)
        require_owner(exam, teacher_id)
        results = uow.results.list_for_exam(exam.exam_id)
    return sorted(results, key=lambda r: (r.rank if r.rank is not None else 10**9, r.student_id))
