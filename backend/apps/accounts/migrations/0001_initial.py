from django.db import migrations, models

import apps.accounts.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AppUser",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "uid",
                    models.CharField(
                        default=apps.accounts.models._new_uid,
                        editable=False,
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("first_name", models.CharField(max_length=150)),
                ("last_name", models.CharField(max_length=150)),
                (
                    "phone",
                    models.CharField(
                        db_index=True,
                        help_text="Digits-only phone with country code (older rows may have a leading +)",
                        max_length=20,
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[("manager", "Manager"), ("employee", "Employee")],
                        default="employee",
                        max_length=32,
                    ),
                ),
                ("active", models.BooleanField(default=True)),
                ("manager_id", models.CharField(blank=True, max_length=64, null=True)),
                ("subcontractor_id", models.CharField(blank=True, max_length=64, null=True)),
                ("site_ids", models.JSONField(blank=True, default=list)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PhoneIndex",
            fields=[
                ("key", models.CharField(max_length=20, primary_key=True, serialize=False)),
                ("uid", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "phone index entries",
            },
        ),
    ]
