from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuthCode",
            fields=[
                (
                    "key",
                    models.CharField(
                        help_text="Canonical phone key (digits only, with country code)",
                        max_length=20,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("code_hash", models.CharField(help_text="HMAC-SHA256 of key and code", max_length=64)),
                ("created_at", models.DateTimeField()),
                ("expires_at", models.DateTimeField()),
                ("last_sent_at", models.DateTimeField()),
                (
                    "attempts",
                    models.PositiveSmallIntegerField(
                        default=0,
                        help_text="Wrong verification attempts against the current code",
                    ),
                ),
                (
                    "delete_after",
                    models.DateTimeField(
                        db_index=True,
                        help_text="Equals expires_at; rows past this are purged by cleanup_auth_codes",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
