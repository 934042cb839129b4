# apps/domains/exams/migrations/0001_initial.py
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Exam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("owner_teacher_id", models.PositiveIntegerField(db_index=True)),
                ("total_marks", models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ("has_negative_marking", models.BooleanField(default=False)),
                ("allow_negative_total", models.BooleanField(default=False)),
                ("schedule_start", models.DateTimeField(blank=True, null=True)),
                ("schedule_end", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "exams_exam",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ExamQuestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("number", models.PositiveIntegerField()),
                ("text", models.TextField(blank=True)),
                (
                    "question_type",
                    models.CharField(
                        choices=[
                            ("OBJECTIVE", "Objective"),
                            ("SHORT_ANSWER", "Short answer"),
                            ("SUBJECTIVE", "Subjective"),
                        ],
                        default="OBJECTIVE",
                        max_length=20,
                    ),
                ),
                ("marks", models.DecimalField(decimal_places=2, default=1, max_digits=6)),
                ("negative_marks", models.DecimalField(decimal_places=2, default=0, max_digits=6)),
                (
                    "exam",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="exams.exam",
                    ),
                ),
            ],
            options={
                "db_table": "exams_question",
                "ordering": ["number"],
                "unique_together": {("exam", "number")},
            },
        ),
        migrations.CreateModel(
            name="QuestionOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("text", models.CharField(max_length=500)),
                ("is_correct", models.BooleanField(default=False)),
                ("order", models.PositiveIntegerField(default=0)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="options",
                        to="exams.examquestion",
                    ),
                ),
            ],
            options={
                "db_table": "exams_question_option",
                "ordering": ["order", "id"],
            },
        ),
    ]
