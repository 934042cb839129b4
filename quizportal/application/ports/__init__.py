from quizportal.application.ports.unit_of_work import UnitOfWork
from quizportal.application.ports.repositories import (
    ExamCatalog,
    GradingRecordRepository,
    PublicationRepository,
    ResponseRepository,
    ResultRepository,
)

__all__ = [
    "UnitOfWork",
    "ExamCatalog",
    "ResponseRepository",
    "GradingRecordRepository",
    "ResultRepository",
    "PublicationRepository",
]
