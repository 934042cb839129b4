# PATH: apps/domains/submissions/apps.py
# 역할: submissions 도메인 앱 설정(AppConfig)

from django.apps import AppConfig


class SubmissionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.domains.submissions"
    label = "submissions"
