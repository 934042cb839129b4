# PATH: apps/domains/exams/apps.py
# 역할: exams 도메인 앱 설정(AppConfig)

from django.apps import AppConfig


class ExamsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.domains.exams"
    label = "exams"
