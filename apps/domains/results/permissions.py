# PATH: apps/domains/results/permissions.py
from __future__ import annotations

from rest_framework.permissions import BasePermission


def _role(u) -> str:
    """
    user.role / user.user_type이 있으면 사용, 없으면 빈 문자열.
    """
    v = getattr(u, "role", None) or getattr(u, "user_type", None) or ""
    return str(v).upper()


def is_admin_user(u) -> bool:
    return bool(getattr(u, "is_superuser", False) or _role(u) == "ADMIN")


def is_teacher_user(u) -> bool:
    return bool(
        is_admin_user(u)
        or getattr(u, "is_staff", False)
        or _role(u) in ("TEACHER", "STAFF")
    )


def is_student_user(u) -> bool:
    # teacher/admin이 아니면 student
    return bool(not is_teacher_user(u))


class IsStudent(BasePermission):
    def has_permission(self, request, view):
        u = getattr(request, "user", None)
        return bool(u and u.is_authenticated and is_student_user(u))


class IsTeacher(BasePermission):
    """
    채점/공개 경로 전용. 시험 소유 여부는 채점 코어가 확인한다.
    """

    def has_permission(self, request, view):
        u = getattr(request, "user", None)
        return bool(u and u.is_authenticated and is_teacher_user(u))
