from decimal import Decimal

import django.core.validators
from django.db import migrations, models
import django.db.models.deletion

import apps.tenants.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("rooms", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AddOn",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("addon_code", models.CharField(blank=True, max_length=50)),
                (
                    "addon_type",
                    models.CharField(
                        choices=[("service", "Service"), ("product", "Product"), ("experience", "Experience")],
                        default="service",
                        max_length=20,
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("currency", models.CharField(default=apps.tenants.models.default_currency, max_length=3)),
                (
                    "pricing_type",
                    models.CharField(
                        choices=[
                            ("per_booking", "Per booking"),
                            ("per_night", "Per night"),
                            ("per_guest", "Per guest"),
                            ("per_guest_per_night", "Per guest per night"),
                        ],
                        default="per_booking",
                        max_length=30,
                    ),
                ),
                (
                    "max_quantity",
                    models.PositiveSmallIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "available_for_rooms",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Leave empty to offer the add-on with every room.",
                        related_name="addons",
                        to="rooms.room",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addons",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Add-on",
                "verbose_name_plural": "Add-ons",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["tenant", "is_active"], name="addons_tenant_active_idx")],
            },
        ),
    ]
