from .student_response import StudentResponse

__all__ = ["StudentResponse"]
