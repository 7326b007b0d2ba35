import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Suggestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("category", models.CharField(
                    choices=[
                        ("development", "Pembangunan"),
                        ("public_service", "Layanan Publik"),
                        ("policy", "Kebijakan"),
                        ("economy", "Ekonomi"),
                        ("social", "Sosial"),
                        ("other", "Lainnya"),
                    ],
                    db_index=True,
                    max_length=20,
                    verbose_name="Category",
                )),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(verbose_name="Description")),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Menunggu"),
                        ("approved", "Disetujui"),
                        ("rejected", "Ditolak"),
                    ],
                    db_index=True,
                    default="pending",
                    max_length=20,
                    verbose_name="Status",
                )),
                ("response", models.TextField(blank=True, null=True, verbose_name="Official Response")),
                ("submitter", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="suggestions",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="Submitter",
                )),
            ],
            options={
                "verbose_name": "Suggestion",
                "verbose_name_plural": "Suggestions",
                "ordering": ["-created_at"],
            },
        ),
    ]
