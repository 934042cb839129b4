from decimal import Decimal

from quizportal.domain.grading.auto_grader import auto_grade, is_correct_choice
from quizportal.domain.grading.entities import QuestionInfo, QuestionType


def _objective(**kwargs):
    defaults = dict(
        question_id=1,
        exam_id=1,
        question_type=QuestionType.OBJECTIVE,
        marks=Decimal("5"),
        negative_marks=Decimal("1.25"),
        correct_option_id=42,
        correct_option_text="Paris",
    )
    defaults.update(kwargs)
    return QuestionInfo(**defaults)


def test_correct_option_text_awards_full_marks():
    out = auto_grade(_objective(), "Paris")
    assert out.marks_obtained == Decimal("5")
    assert out.is_correct is True


def test_correct_option_id_is_accepted():
    assert is_correct_choice(_objective(), "42")
    assert auto_grade(_objective(), " 42 ").is_correct is True


def test_wrong_answer_without_negative_marking_scores_zero():
    out = auto_grade(_objective(), "London")
    assert out.marks_obtained == Decimal("0")
    assert out.is_correct is False


def test_wrong_answer_with_negative_marking_is_penalised():
    out = auto_grade(_objective(), "London", negative_marking=True)
    assert out.marks_obtained == Decimal("-1.25")
    assert out.is_correct is False


def test_blank_answer_is_never_penalised():
    out = auto_grade(_objective(), "   ", negative_marking=True)
    assert out.marks_obtained == Decimal("0")
    assert out.is_correct is False


def test_subjective_question_is_left_ungraded():
    q = _objective(question_type=QuestionType.SUBJECTIVE, correct_option_id=None, correct_option_text=None)
    out = auto_grade(q, "free text")
    assert out.marks_obtained == Decimal("0")
    assert out.is_correct is None


def test_regrading_is_deterministic():
    q = _objective()
    assert auto_grade(q, "Paris") == auto_grade(q, "Paris")
