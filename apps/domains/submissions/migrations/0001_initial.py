# apps/domains/submissions/migrations/0001_initial.py
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("exams", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="StudentResponse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("student_id", models.PositiveIntegerField(db_index=True)),
                ("answer_text", models.TextField(blank=True, default="")),
                ("submitted_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("marks_obtained", models.DecimalField(decimal_places=2, default=0, max_digits=6)),
                ("is_correct", models.BooleanField(blank=True, null=True)),
                (
                    "exam",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="responses",
                        to="exams.exam",
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="responses",
                        to="exams.examquestion",
                    ),
                ),
            ],
            options={
                "db_table": "submissions_student_response",
                "ordering": ["submitted_at", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="studentresponse",
            constraint=models.UniqueConstraint(
                fields=("exam", "question", "student_id"),
                name="uniq_response_exam_question_student",
            ),
        ),
        migrations.AddIndex(
            model_name="studentresponse",
            index=models.Index(fields=["exam", "student_id"], name="subm_resp_exam_student_idx"),
        ),
    ]
