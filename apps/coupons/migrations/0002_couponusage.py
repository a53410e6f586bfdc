from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ("tenants", "0001_initial"),
        ("bookings", "0001_initial"),
        ("coupons", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CouponUsage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_email", models.EmailField(max_length=254)),
                ("discount_applied", models.DecimalField(decimal_places=2, max_digits=12)),
                ("original_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("final_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("used_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="coupon_usages",
                        to="bookings.booking",
                    ),
                ),
                (
                    "coupon",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="usages",
                        to="coupons.coupon",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coupon_usages",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Coupon usage",
                "verbose_name_plural": "Coupon usages",
                "ordering": ["-used_at"],
            },
        ),
    ]
