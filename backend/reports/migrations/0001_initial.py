import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="Updated At")),
                ("category", models.CharField(
                    choices=[
                        ("infrastructure", "Infrastruktur"),
                        ("sanitation", "Kebersihan"),
                        ("security", "Keamanan"),
                        ("health", "Kesehatan"),
                        ("education", "Pendidikan"),
                        ("other", "Lainnya"),
                    ],
                    db_index=True,
                    max_length=20,
                    verbose_name="Category",
                )),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(verbose_name="Description")),
                ("photo_ref", models.CharField(help_text="URL or storage key of the uploaded photo.", max_length=500, verbose_name="Photo Reference")),
                ("latitude", models.FloatField(verbose_name="Latitude")),
                ("longitude", models.FloatField(verbose_name="Longitude")),
                ("address", models.CharField(max_length=500, verbose_name="Address")),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Menunggu"),
                        ("in_progress", "Diproses"),
                        ("resolved", "Selesai"),
                        ("rejected", "Ditolak"),
                    ],
                    db_index=True,
                    default="pending",
                    max_length=20,
                    verbose_name="Status",
                )),
                ("response", models.TextField(blank=True, null=True, verbose_name="Official Response")),
                ("assignee", models.ForeignKey(
                    blank=True,
                    help_text="Last officer or admin who changed the status.",
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="assigned_reports",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="Assignee",
                )),
                ("reporter", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="reports",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="Reporter",
                )),
            ],
            options={
                "verbose_name": "Report",
                "verbose_name_plural": "Reports",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "category"], name="report_status_category_idx")],
            },
        ),
    ]
