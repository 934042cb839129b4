from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from quizportal.domain.grading.entities import QuestionType
from tests.fakes import FakeUnitOfWork

TEACHER = 100
OTHER_TEACHER = 200
EXAM = 1
OBJ_1 = 11
OBJ_2 = 12
SUBJ = 13

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def exam_uow(uow: FakeUnitOfWork) -> FakeUnitOfWork:
    """2 objective questions (5 marks) + 1 subjective question (10 marks)."""
    uow.add_exam(EXAM, owner_teacher_id=TEACHER, total_marks="20")
    uow.add_question(OBJ_1, EXAM, QuestionType.OBJECTIVE, marks="5",
                     correct_option_id=501, correct_option_text="B", text="2 + 2 = ?")
    uow.add_question(OBJ_2, EXAM, QuestionType.OBJECTIVE, marks="5",
                     correct_option_id=502, correct_option_text="Paris", text="Capital of France?")
    uow.add_question(SUBJ, EXAM, QuestionType.SUBJECTIVE, marks="10", text="Explain photosynthesis.")
    return uow
