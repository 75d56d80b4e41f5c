import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
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
                ("name", models.CharField(max_length=255)),
                (
                    "account_number",
                    models.CharField(blank=True, default="", max_length=40),
                ),
            ],
            options={
                "db_table": "accounts",
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["account_number"], name="accounts_number_idx"
                    )
                ],
            },
        ),
    ]
