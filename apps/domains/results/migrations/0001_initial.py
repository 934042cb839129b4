# apps/domains/results/migrations/0001_initial.py
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("exams", "0001_initial"),
        ("submissions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="GradingRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("student_id", models.PositiveIntegerField()),
                ("graded_by_teacher_id", models.PositiveIntegerField()),
                ("marks_obtained", models.DecimalField(decimal_places=2, max_digits=6)),
                ("feedback", models.TextField(blank=True, null=True)),
                ("comment", models.TextField(blank=True, null=True)),
                ("is_partial_credit", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("GRADED", "Graded"),
                            ("REGRADED", "Regraded"),
                            ("INVALIDATED", "Invalidated"),
                        ],
                        default="GRADED",
                        max_length=20,
                    ),
                ),
                ("graded_at", models.DateTimeField()),
                ("regrade_reason", models.TextField(blank=True, null=True)),
                ("regraded_at", models.DateTimeField(blank=True, null=True)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="grading_records",
                        to="exams.examquestion",
                    ),
                ),
                (
                    "regrade_from",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="regraded_by",
                        to="results.gradingrecord",
                    ),
                ),
                (
                    "response",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="grading_records",
                        to="submissions.studentresponse",
                    ),
                ),
            ],
            options={
                "db_table": "results_grading_record",
                "ordering": ["-graded_at", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="gradingrecord",
            constraint=models.UniqueConstraint(
                condition=models.Q(status="GRADED"),
                fields=("response",),
                name="uniq_current_grading_record_per_response",
            ),
        ),
        migrations.AddIndex(
            model_name="gradingrecord",
            index=models.Index(fields=["response", "status"], name="results_grading_resp_st_idx"),
        ),
        migrations.CreateModel(
            name="Result",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("student_id", models.PositiveIntegerField(db_index=True)),
                ("total_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("percentage", models.DecimalField(decimal_places=2, default=0, max_digits=6)),
                ("rank", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("COMPLETED", "Completed"),
                            ("GRADED", "Graded"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("is_published", models.BooleanField(default=False)),
                ("evaluated_by", models.PositiveIntegerField(blank=True, null=True)),
                ("evaluated_at", models.DateTimeField(blank=True, null=True)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                (
                    "exam",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="results",
                        to="exams.exam",
                    ),
                ),
            ],
            options={
                "db_table": "results_result",
                "ordering": ["rank", "student_id"],
                "unique_together": {("exam", "student_id")},
            },
        ),
        migrations.AddIndex(
            model_name="result",
            index=models.Index(fields=["exam", "total_marks"], name="results_result_exam_tot_idx"),
        ),
        migrations.AddIndex(
            model_name="result",
            index=models.Index(fields=["student_id", "is_published"], name="results_result_stu_pub_idx"),
        ),
        migrations.CreateModel(
            name="ExamPublication",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("NOT_PUBLISHED", "Not published"),
                            ("PUBLISHED", "Published"),
                        ],
                        default="NOT_PUBLISHED",
                        max_length=20,
                    ),
                ),
                ("total_students", models.PositiveIntegerField(default=0)),
                ("graded_students", models.PositiveIntegerField(default=0)),
                ("passing_percentage", models.DecimalField(decimal_places=2, default=50, max_digits=5)),
                ("published_by", models.PositiveIntegerField(blank=True, null=True)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "exam",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="publication",
                        to="exams.exam",
                    ),
                ),
            ],
            options={
                "db_table": "results_exam_publication",
            },
        ),
    ]
