from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.domains.exams.models import Exam, ExamQuestion, QuestionOption
from apps.domains.submissions.models import StudentResponse

pytestmark = pytest.mark.django_db

BASE = "/api/v1"


@pytest.fixture
def teacher():
    return get_user_model().objects.create_user(username="teacher", password="pw", is_staff=True)


@pytest.fixture
def student():
    return get_user_model().objects.create_user(username="student", password="pw")


@pytest.fixture
def exam(teacher):
    exam = Exam.objects.create(title="Quiz", owner_teacher_id=teacher.id)
    q1 = ExamQuestion.objects.create(exam=exam, number=1, question_type="OBJECTIVE", marks=5)
    QuestionOption.objects.create(question=q1, text="B", is_correct=True)
    ExamQuestion.objects.create(exam=exam, number=2, question_type="SUBJECTIVE", marks=10)
    return exam


def _client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def test_health_check():
    resp = APIClient().get("/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_student_flow_and_teacher_grading(exam, teacher, student):
    q1, q2 = list(exam.questions.order_by("number"))
    s = _client(student)
    t = _client(teacher)

    resp = s.post(f"{BASE}/submissions/exams/{exam.id}/responses/", {"question_id": q1.id, "answer_text": "B"}, format="json")
    assert resp.status_code == 201
    assert resp.json()["is_correct"] is True

    resp = s.post(f"{BASE}/submissions/exams/{exam.id}/responses/", {"question_id": q2.id, "answer_text": "essay"}, format="json")
    assert resp.status_code == 201
    essay_id = resp.json()["id"]

    resp = t.get(f"{BASE}/results/exams/{exam.id}/grading/pending/")
    assert resp.status_code == 200
    assert resp.json()["count"] == 1
    assert resp.json()["results"][0]["response"]["id"] == essay_id

    resp = t.post(f"{BASE}/results/exams/{exam.id}/publish/", {"passing_percentage": 50}, format="json")
    assert resp.status_code == 409
    assert resp.json()["code"] == "conflict"

    resp = t.post(f"{BASE}/results/responses/{essay_id}/grade/", {"marks_obtained": "11"}, format="json")
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"

    resp = t.post(f"{BASE}/results/responses/{essay_id}/grade/", {"marks_obtained": "6", "feedback": "ok"}, format="json")
    assert resp.status_code == 201
    assert resp.json()["status"] == "GRADED"

    resp = t.post(f"{BASE}/results/responses/{essay_id}/grade/", {"marks_obtained": "7"}, format="json")
    assert resp.status_code == 409

    resp = t.post(f"{BASE}/results/responses/{essay_id}/regrade/", {"new_marks": "8"}, format="json")
    assert resp.status_code == 400

    resp = t.post(f"{BASE}/results/responses/{essay_id}/regrade/", {"new_marks": "8", "reason": "recount"}, format="json")
    assert resp.status_code == 201

    resp = t.get(f"{BASE}/results/responses/{essay_id}/history/")
    assert [Decimal(r["marks_obtained"]) for r in resp.json()] == [Decimal("8"), Decimal("6")]

    resp = t.post(f"{BASE}/results/exams/{exam.id}/publish/", {}, format="json")
    assert resp.status_code == 200
    assert resp.json()["is_published"] is True
    assert Decimal(resp.json()["passing_percentage"]) == Decimal("50")

    resp = s.get(f"{BASE}/results/me/exams/{exam.id}/")
    assert resp.status_code == 200
    body = resp.json()
    assert Decimal(body["result"]["total_marks"]) == Decimal("13")
    assert Decimal(body["result"]["percentage"]) == Decimal("86.67")
    assert body["is_passed"] is True

    resp = t.post(f"{BASE}/results/exams/{exam.id}/unpublish/", {"reason": "appeal"}, format="json")
    assert resp.status_code == 200
    assert s.get(f"{BASE}/results/me/exams/{exam.id}/").status_code == 404
    assert s.get(f"{BASE}/results/me/").json() == []


def test_grading_someone_elses_exam_is_forbidden(exam, student):
    other = get_user_model().objects.create_user(username="other", password="pw", is_staff=True)
    q2 = exam.questions.get(number=2)
    response = StudentResponse.objects.create(exam=exam, question=q2, student_id=student.id, answer_text="x")

    resp = _client(other).post(f"{BASE}/results/responses/{response.id}/grade/", {"marks_obtained": "1"}, format="json")
    assert resp.status_code == 403
    assert resp.json()["code"] == "unauthorized"


def test_history_of_someone_elses_exam_is_forbidden(exam, teacher, student):
    other = get_user_model().objects.create_user(username="other", password="pw", is_staff=True)
    q2 = exam.questions.get(number=2)
    response = StudentResponse.objects.create(exam=exam, question=q2, student_id=student.id, answer_text="x")
    resp = _client(teacher).post(
        f"{BASE}/results/responses/{response.id}/grade/", {"marks_obtained": "4", "feedback": "private"}, format="json"
    )
    assert resp.status_code == 201

    resp = _client(other).get(f"{BASE}/results/responses/{response.id}/history/")
    assert resp.status_code == 403
    assert "private" not in resp.content.decode()


def test_students_cannot_reach_grading_routes(exam, student):
    resp = _client(student).get(f"{BASE}/results/exams/{exam.id}/grading/pending/")
    assert resp.status_code == 403


def test_unknown_exam_is_404(teacher):
    resp = _client(teacher).get(f"{BASE}/results/exams/999/publication/")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_batch_grade_reports_failures(exam, teacher, student):
    q2 = exam.questions.get(number=2)
    good = StudentResponse.objects.create(exam=exam, question=q2, student_id=student.id, answer_text="x")

    resp = _client(teacher).post(
        f"{BASE}/results/exams/{exam.id}/grading/batch/",
        {
            "question_id": q2.id,
            "items": [
                {"response_id": good.id, "marks_obtained": "4"},
                {"response_id": 9999, "marks_obtained": "4"},
            ],
        },
        format="json",
    )
    assert resp.status_code == 200
    body = resp.json()
    assert (body["success_count"], body["fail_count"]) == (1, 1)
    assert body["errors"][0]["response_id"] == 9999


def test_teacher_response_list_is_filterable(exam, teacher, student):
    q1, q2 = list(exam.questions.order_by("number"))
    StudentResponse.objects.create(exam=exam, question=q1, student_id=student.id, answer_text="B", is_correct=True)
    StudentResponse.objects.create(exam=exam, question=q2, student_id=student.id, answer_text="x")

    resp = _client(teacher).get(f"{BASE}/submissions/exams/{exam.id}/responses/list/", {"question": q2.id})
    assert resp.status_code == 200
    assert [r["question"] for r in resp.json()] == [q2.id]


def test_withdraw_and_finalize(exam, student):
    q1 = exam.questions.get(number=1)
    s = _client(student)
    created = s.post(f"{BASE}/submissions/exams/{exam.id}/responses/", {"question_id": q1.id, "answer_text": "B"}, format="json")
    assert s.delete(f"{BASE}/submissions/responses/{created.json()['id']}/").status_code == 204

    s.post(f"{BASE}/submissions/exams/{exam.id}/responses/", {"question_id": q1.id, "answer_text": "B"}, format="json")
    resp = s.post(f"{BASE}/submissions/exams/{exam.id}/finalize/")
    assert resp.status_code == 201
    assert resp.json()["status"] == "COMPLETED"
    assert s.post(f"{BASE}/submissions/exams/{exam.id}/finalize/").status_code == 409
