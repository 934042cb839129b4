# apps/domains/exams/models/__init__.py
from .exam import Exam
from .question import ExamQuestion, QuestionOption

__all__ = [
    "Exam",
    "ExamQuestion",
    "QuestionOption",
]
