# PATH: apps/domains/submissions/urls.py
from django.urls import path

from apps.domains.submissions.views.response_views import (
    ExamResponsesListView,
    FinalizeAttemptView,
    SubmitResponseView,
    WithdrawResponseView,
)

urlpatterns = [
    path("exams/<int:exam_id>/responses/", SubmitResponseView.as_view(), name="response-submit"),
    path("exams/<int:exam_id>/responses/list/", ExamResponsesListView.as_view(), name="response-list"),
    path("exams/<int:exam_id>/finalize/", FinalizeAttemptView.as_view(), name="attempt-finalize"),
    path("responses/<int:response_id>/", WithdrawResponseView.as_view(), name="response-withdraw"),
]
