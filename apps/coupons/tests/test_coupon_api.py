"""Tests for coupon management, validation and usage history."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.coupons.models import Coupon, CouponUsage
from apps.coupons.services import CouponValidationError, record_usage, validate_coupon
from apps.rooms.models import Room
from apps.tenants.models import Tenant

User = get_user_model()


class CouponAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="StrongPass123")
        self.tenant = Tenant.objects.create(name="Karoo Guest House", owner=self.owner)
        self.room = Room.objects.create(tenant=self.tenant, name="Garden Room", base_price_per_night=Decimal("1000"))
        self.other_room = Room.objects.create(tenant=self.tenant, name="Suite", base_price_per_night=Decimal("2000"))
        self.coupon = Coupon.objects.create(
            tenant=self.tenant,
            code="WINTER10",
            name="Winter special",
            discount_type=Coupon.Type.PERCENTAGE,
            discount_value=Decimal("10"),
        )
        self.client.credentials(HTTP_X_TENANT_ID=str(self.tenant.id))
        self.list_url = reverse("coupon-list")
        self.validate_url = reverse("coupon-validate")

    def test_manager_creates_coupon(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {
            "code": " stay3pay2 ",
            "name": "Stay 3 pay 2",
            "discount_type": "free_nights",
            "discount_value": "1",
            "min_nights": 3,
            "applicable_rooms": [self.room.id],
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["code"], "STAY3PAY2")
        self.assertEqual(response.data["current_uses"], 0)

    def test_duplicate_code_is_rejected_case_insensitively(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {"code": "winter10", "name": "Copy", "discount_type": "percentage", "discount_value": "5"}

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("code", response.data)

    def test_percentage_above_100_is_rejected(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {"code": "TOOMUCH", "name": "x", "discount_type": "percentage", "discount_value": "150"}

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_guests_cannot_list_coupons(self) -> None:
        response = self.client.get(self.list_url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_validate_reports_discount(self) -> None:
        response = self.client.post(
            self.validate_url,
            {"code": "winter10", "room_id": self.room.id, "subtotal": "2500.00", "nights": 2},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["valid"])
        self.assertEqual(response.data["coupon"]["code"], "WINTER10")
        self.assertEqual(response.data["discount_amount"], Decimal("250.00"))
        self.assertEqual(response.data["final_amount"], Decimal("2250.00"))

    def test_validate_unknown_code(self) -> None:
        response = self.client.post(self.validate_url, {"code": "NOPE"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"valid": False, "errors": ["Invalid coupon code"]})

    def test_validate_collects_every_failed_check(self) -> None:
        check_in = date.today() + timedelta(days=60)
        self.coupon.is_active = False
        self.coupon.min_nights = 3
        self.coupon.min_booking_amount = Decimal("5000.00")
        self.coupon.valid_until = check_in - timedelta(days=1)
        self.coupon.save()
        self.coupon.applicable_rooms.add(self.other_room)

        response = self.client.post(
            self.validate_url,
            {
                "code": "WINTER10",
                "room_ids": [self.room.id],
                "subtotal": "1000.00",
                "nights": 1,
                "check_in": check_in.isoformat(),
            },
            format="json",
        )

        self.assertFalse(response.data["valid"])
        self.assertEqual(
            response.data["errors"],
            [
                "This coupon is no longer active",
                "This coupon has expired",
                "This coupon is not valid for the selected room(s)",
                "Minimum booking amount of 5000.00 required",
                "Minimum stay of 3 nights required",
            ],
        )

    def test_validate_requires_code(self) -> None:
        response = self.client.post(self.validate_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_usage_history(self) -> None:
        booking = Booking.objects.create(
            tenant=self.tenant,
            room=self.room,
            guest_name="Thandi",
            guest_email="thandi@example.com",
            check_in=date(2030, 7, 1),
            check_out=date(2030, 7, 3),
        )
        record_usage(
            self.coupon,
            booking=booking,
            customer_email="thandi@example.com",
            discount_applied=Decimal("200.00"),
            original_amount=Decimal("2000.00"),
            final_amount=Decimal("1800.00"),
        )
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse("coupon-usage", kwargs={"pk": self.coupon.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["booking"]["guest_name"], "Thandi")
        self.coupon.refresh_from_db()
        self.assertEqual(self.coupon.current_uses, 1)


class CouponRulesTests(APITestCase):
    """Usage limits checked by the coupon service."""

    def setUp(self) -> None:
        owner = User.objects.create_user(username="owner", password="StrongPass123")
        self.tenant = Tenant.objects.create(name="Karoo Guest House", owner=owner)
        self.coupon = Coupon.objects.create(
            tenant=self.tenant,
            code="ONCE",
            name="Once per guest",
            discount_type=Coupon.Type.FIXED_AMOUNT,
            discount_value=Decimal("300"),
            max_uses=2,
            max_uses_per_customer=1,
        )

    def _use(self, email: str) -> None:
        CouponUsage.objects.create(
            coupon=self.coupon,
            tenant=self.tenant,
            customer_email=email,
            discount_applied=Decimal("300"),
            original_amount=Decimal("1000"),
            final_amount=Decimal("700"),
        )

    def test_fixed_amount_is_capped_at_subtotal(self) -> None:
        discount = validate_coupon(self.coupon, subtotal=Decimal("200.00"), nights=1)

        self.assertEqual(discount, Decimal("200.00"))

    def test_per_customer_limit_ignores_email_case(self) -> None:
        self._use("guest@example.com")

        with self.assertRaises(CouponValidationError) as ctx:
            validate_coupon(self.coupon, customer_email="GUEST@example.com", subtotal=Decimal("1000"), nights=1)

        self.assertEqual(ctx.exception.errors, ["You have already used this coupon the maximum number of times"])

    def test_total_usage_limit(self) -> None:
        self.coupon.current_uses = 2
        self.coupon.save()

        with self.assertRaises(CouponValidationError) as ctx:
            validate_coupon(self.coupon, subtotal=Decimal("1000"), nights=1)

        self.assertEqual(ctx.exception.errors, ["This coupon has reached its maximum usage limit"])

    def test_free_nights_use_accommodation_total(self) -> None:
        self.coupon.discount_type = Coupon.Type.FREE_NIGHTS
        self.coupon.discount_value = Decimal("1")
        self.coupon.max_uses = None
        self.coupon.save()

        discount = validate_coupon(
            self.coupon,
            subtotal=Decimal("3600.00"),
            accommodation_total=Decimal("3000.00"),
            nights=3,
        )

        self.assertEqual(discount, Decimal("1000.00"))
