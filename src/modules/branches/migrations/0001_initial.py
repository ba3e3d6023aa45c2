from django.db import migrations, models
import uuid6


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Branch",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, default=None, null=True
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("city", models.CharField(max_length=120)),
                ("address", models.TextField()),
                ("phone", models.CharField(max_length=32)),
                (
                    "code",
                    models.CharField(
                        blank=True, max_length=20, null=True, unique=True
                    ),
                ),
                (
                    "two_gis_link",
                    models.URLField(blank=True, default="", max_length=500),
                ),
            ],
            options={
                "db_table": "branches",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["city"], name="branches_city_idx"),
                ],
            },
        ),
    ]
