# apps/domains/results/models/__init__.py

from .grading_record import GradingRecord
from .result import Result
from .exam_publication import ExamPublication

__all__ = [
    "GradingRecord",
    "Result",
    "ExamPublication",
]
