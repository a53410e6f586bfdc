from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion

import apps.tenants.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("room_code", models.CharField(blank=True, max_length=50)),
                ("bed_type", models.CharField(default="double", max_length=100)),
                ("bed_count", models.PositiveSmallIntegerField(default=1)),
                (
                    "max_guests",
                    models.PositiveSmallIntegerField(
                        default=2, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "base_price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("currency", models.CharField(default=apps.tenants.models.default_currency, max_length=3)),
                (
                    "min_stay_nights",
                    models.PositiveSmallIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "max_stay_nights",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Empty means no maximum.",
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rooms",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["tenant", "is_active"], name="rooms_room_tenant_active_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("max_stay_nights__isnull", True),
                            ("max_stay_nights__gte", models.F("min_stay_nights")),
                            _connector="OR",
                        ),
                        name="room_min_max_stay_valid",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SeasonalRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(help_text="Inclusive.")),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("priority", models.IntegerField(default=0, help_text="When periods overlap the higher priority wins.")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seasonal_rates",
                        to="rooms.room",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seasonal_rates",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Seasonal rate",
                "verbose_name_plural": "Seasonal rates",
                "ordering": ["start_date", "-priority"],
                "indexes": [
                    models.Index(
                        fields=["room", "start_date", "end_date", "priority"],
                        name="rooms_rate_room_dates_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gte", models.F("start_date"))),
                        name="seasonal_rates_valid_date_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("price_per_night__gte", 0)),
                        name="seasonal_rates_valid_price",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RoomBlock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(help_text="Inclusive.")),
                (
                    "reason",
                    models.CharField(
                        choices=[("blocked", "Blocked"), ("maintenance", "Maintenance"), ("owner_use", "Owner use")],
                        default="blocked",
                        max_length=20,
                    ),
                ),
                ("notes", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="room_blocks",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocks",
                        to="rooms.room",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="room_blocks",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room block",
                "verbose_name_plural": "Room blocks",
                "ordering": ["start_date"],
                "indexes": [
                    models.Index(fields=["room", "start_date", "end_date"], name="rooms_block_room_dates_idx")
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gte", models.F("start_date"))),
                        name="room_blocks_valid_date_range",
                    )
                ],
            },
        ),
    ]
