# PATH: apps/domains/results/urls.py

from django.urls import path

# ======================================================
# Teacher: grading
# ======================================================
from apps.domains.results.views.grading_views import (
    BatchGradeView,
    GradeResponseView,
    GradingHistoryView,
    GradingStatsView,
    PendingResponsesView,
    RegradeResponseView,
    ResponseForGradingView,
)

# ======================================================
# Teacher: publication
# ======================================================
from apps.domains.results.views.publication_views import (
    ExamResultsView,
    PublicationStatusView,
    PublishExamView,
    UnpublishExamView,
)

# ======================================================
# Student
# ======================================================
from apps.domains.results.views.student_result_views import MyExamResultView, MyResultsView


urlpatterns = [
    # grading
    path("exams/<int:exam_id>/grading/pending/", PendingResponsesView.as_view(), name="grading-pending"),
    path("exams/<int:exam_id>/grading/batch/", BatchGradeView.as_view(), name="grading-batch"),
    path("exams/<int:exam_id>/grading/stats/", GradingStatsView.as_view(), name="grading-stats"),
    path("responses/<int:response_id>/", ResponseForGradingView.as_view(), name="grading-response"),
    path("responses/<int:response_id>/grade/", GradeResponseView.as_view(), name="grading-grade"),
    path("responses/<int:response_id>/regrade/", RegradeResponseView.as_view(), name="grading-regrade"),
    path("responses/<int:response_id>/history/", GradingHistoryView.as_view(), name="grading-history"),

    # publication
    path("exams/<int:exam_id>/publish/", PublishExamView.as_view(), name="exam-publish"),
    path("exams/<int:exam_id>/unpublish/", UnpublishExamView.as_view(), name="exam-unpublish"),
    path("exams/<int:exam_id>/publication/", PublicationStatusView.as_view(), name="exam-publication"),
    path("exams/<int:exam_id>/results/", ExamResultsView.as_view(), name="exam-results"),

    # student
    path("me/", MyResultsView.as_view(), name="my-results"),
    path("me/exams/<int:exam_id>/", MyExamResultView.as_view(), name="my-exam-result"),
]
