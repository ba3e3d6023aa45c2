from django.db import migrations, models
import uuid6


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Client",
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
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=32)),
                ("city", models.CharField(blank=True, default="", max_length=120)),
                (
                    "client_code",
                    models.PositiveIntegerField(blank=True, null=True, unique=True),
                ),
                ("telegram_id", models.BigIntegerField(blank=True, null=True)),
                ("language", models.CharField(default="ru", max_length=8)),
            ],
            options={
                "db_table": "clients",
                "ordering": ["-created_at"],
            },
        ),
    ]
