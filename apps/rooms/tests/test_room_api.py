"""Tests for rooms, seasonal rates, blocks and the availability calendar."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.rooms.models import Room, RoomBlock, SeasonalRate
from apps.tenants.models import Tenant

User = get_user_model()


class RoomAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="StrongPass123")
        self.guest = User.objects.create_user(username="guest", password="StrongPass123")
        self.tenant = Tenant.objects.create(name="Karoo Guest House", owner=self.owner)
        self.room = Room.objects.create(
            tenant=self.tenant,
            name="Garden Room",
            base_price_per_night=Decimal("1000.00"),
            max_guests=2,
            min_stay_nights=2,
        )
        self.hidden_room = Room.objects.create(
            tenant=self.tenant,
            name="Attic",
            base_price_per_night=Decimal("500.00"),
            is_active=False,
        )
        self.client.credentials(HTTP_X_TENANT_ID=str(self.tenant.id))
        # A month comfortably in the future so no day of it is in the past.
        self.year = date.today().year + 1
        self.month = 6

    def test_guests_see_active_rooms_only(self) -> None:
        response = self.client.get(reverse("room-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([room["id"] for room in response.data], [self.room.id])

    def test_manager_sees_inactive_rooms(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse("room-list"))

        self.assertEqual(len(response.data), 2)

    def test_manager_creates_room(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {
            "name": "Sea View Suite",
            "base_price_per_night": "1850.00",
            "max_guests": 3,
            "min_stay_nights": 1,
            "max_stay_nights": 14,
            "currency": "zar",
        }

        response = self.client.post(reverse("room-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["tenant"], self.tenant.id)
        self.assertEqual(response.data["currency"], "ZAR")

    def test_room_without_currency_uses_tenant_currency(self) -> None:
        Tenant.objects.filter(pk=self.tenant.pk).update(currency="NAD")
        self.client.force_authenticate(self.owner)
        payload = {"name": "Dune Cabin", "base_price_per_night": "750.00"}

        response = self.client.post(reverse("room-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["currency"], "NAD")

    def test_max_stay_below_min_stay_is_rejected(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {"name": "Odd", "base_price_per_night": "100.00", "min_stay_nights": 5, "max_stay_nights": 2}

        response = self.client.post(reverse("room-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_other_users_cannot_create_rooms(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(reverse("room-list"), {"name": "x", "base_price_per_night": "1"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_room_with_bookings_cannot_be_deleted(self) -> None:
        Booking.objects.create(
            tenant=self.tenant,
            room=self.room,
            guest_name="Thandi",
            check_in=date(self.year, 6, 1),
            check_out=date(self.year, 6, 3),
        )
        self.client.force_authenticate(self.owner)

        response = self.client.delete(reverse("room-detail", kwargs={"pk": self.room.id}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Room.objects.filter(pk=self.room.pk).exists())

    def test_price_uses_seasonal_rate(self) -> None:
        SeasonalRate.objects.create(
            tenant=self.tenant,
            room=self.room,
            name="Winter",
            start_date=date(self.year, 6, 10),
            end_date=date(self.year, 6, 12),
            price_per_night=Decimal("750.00"),
        )
        url = reverse("room-price", kwargs={"pk": self.room.id})

        seasonal = self.client.get(url, {"date": date(self.year, 6, 12).isoformat()})
        regular = self.client.get(url, {"date": date(self.year, 6, 13).isoformat()})

        self.assertEqual(seasonal.status_code, status.HTTP_200_OK, seasonal.data)
        self.assertEqual(Decimal(seasonal.data["effective_price"]), Decimal("750.00"))
        self.assertEqual(seasonal.data["seasonal_rate"]["name"], "Winter")
        self.assertEqual(Decimal(regular.data["effective_price"]), Decimal("1000.00"))
        self.assertIsNone(regular.data["seasonal_rate"])

    def test_price_requires_a_date(self) -> None:
        response = self.client.get(reverse("room-price", kwargs={"pk": self.room.id}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_prices_return_nightly_schedule(self) -> None:
        SeasonalRate.objects.create(
            tenant=self.tenant,
            room=self.room,
            name="Long weekend",
            start_date=date(self.year, 6, 2),
            end_date=date(self.year, 6, 2),
            price_per_night=Decimal("1500.00"),
        )

        response = self.client.get(
            reverse("room-prices", kwargs={"pk": self.room.id}),
            {"start_date": date(self.year, 6, 1).isoformat(), "end_date": date(self.year, 6, 4).isoformat()},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["night_count"], 3)
        self.assertEqual(Decimal(response.data["total"]), Decimal("3500.00"))
        self.assertEqual(
            [Decimal(night["final_price"]) for night in response.data["nights"]],
            [Decimal("1000.00"), Decimal("1500.00"), Decimal("1000.00")],
        )

    def test_calendar_marks_booked_blocked_and_seasonal_days(self) -> None:
        Booking.objects.create(
            tenant=self.tenant,
            room=self.room,
            guest_name="Thandi",
            check_in=date(self.year, 6, 10),
            check_out=date(self.year, 6, 12),
        )
        Booking.objects.create(
            tenant=self.tenant,
            room=self.room,
            guest_name="Cancelled guest",
            check_in=date(self.year, 6, 20),
            check_out=date(self.year, 6, 22),
            status=Booking.Status.CANCELLED,
        )
        RoomBlock.objects.create(
            tenant=self.tenant,
            room=self.room,
            start_date=date(self.year, 6, 15),
            end_date=date(self.year, 6, 16),
            reason=RoomBlock.Reason.MAINTENANCE,
        )
        SeasonalRate.objects.create(
            tenant=self.tenant,
            room=self.room,
            name="Peak",
            start_date=date(self.year, 6, 25),
            end_date=date(self.year, 6, 25),
            price_per_night=Decimal("1200.00"),
        )

        response = self.client.get(
            reverse("room-calendar", kwargs={"pk": self.room.id}),
            {"year": self.year, "month": self.month},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data["days"]), 42)
        days = {day["date"]: day for day in response.data["days"]}
        unavailable = sorted(day for day, cell in days.items() if cell["is_unavailable"])
        self.assertEqual(
            unavailable,
            [date(self.year, 6, d).isoformat() for d in (10, 11, 15, 16)],
        )
        self.assertTrue(days[date(self.year, 6, 25).isoformat()]["is_seasonal"])
        self.assertEqual(response.data["min_stay_nights"], 2)

    def test_calendar_requires_valid_month(self) -> None:
        response = self.client.get(
            reverse("room-calendar", kwargs={"pk": self.room.id}),
            {"year": self.year, "month": 13},
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar_select_applies_stay_rules(self) -> None:
        Booking.objects.create(
            tenant=self.tenant,
            room=self.room,
            guest_name="Thandi",
            check_in=date(self.year, 6, 12),
            check_out=date(self.year, 6, 13),
        )
        url = reverse("room-calendar-select", kwargs={"pk": self.room.id})
        start = date(self.year, 6, 8).isoformat()

        too_short = self.client.post(
            url, {"start_date": start, "clicked_date": date(self.year, 6, 9).isoformat()}, format="json"
        )
        crossing = self.client.post(
            url, {"start_date": start, "clicked_date": date(self.year, 6, 15).isoformat()}, format="json"
        )
        complete = self.client.post(
            url, {"start_date": start, "clicked_date": date(self.year, 6, 11).isoformat()}, format="json"
        )

        self.assertEqual(too_short.status_code, status.HTTP_200_OK, too_short.data)
        self.assertEqual(too_short.data["start_date"], start)
        self.assertIsNone(too_short.data["end_date"])
        self.assertFalse(too_short.data["changed"])

        self.assertEqual(crossing.data["start_date"], date(self.year, 6, 15).isoformat())
        self.assertEqual(crossing.data["phase"], "awaiting_end")

        self.assertEqual(complete.data["phase"], "complete")
        self.assertEqual(complete.data["nights"], 3)


class RoomScheduleAPITests(APITestCase):
    """Nested seasonal rate and block endpoints."""

    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="StrongPass123")
        self.tenant = Tenant.objects.create(name="Karoo Guest House", owner=self.owner)
        self.room = Room.objects.create(tenant=self.tenant, name="Garden Room", base_price_per_night=Decimal("1000"))
        self.client.credentials(HTTP_X_TENANT_ID=self.tenant.slug)
        self.start = date.today() + timedelta(days=30)

    def _rates_url(self) -> str:
        return reverse("room-seasonal-rate-list", kwargs={"room_id": self.room.id})

    def _blocks_url(self) -> str:
        return reverse("room-block-list", kwargs={"room_id": self.room.id})

    def test_manager_creates_seasonal_rate(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {
            "name": "Festive season",
            "start_date": self.start.isoformat(),
            "end_date": (self.start + timedelta(days=10)).isoformat(),
            "price_per_night": "1400.00",
            "priority": 2,
        }

        response = self.client.post(self._rates_url(), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["room"], self.room.id)
        rate = SeasonalRate.objects.get()
        self.assertEqual(rate.tenant, self.tenant)

    def test_seasonal_rate_end_before_start_is_rejected(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {
            "name": "Broken",
            "start_date": self.start.isoformat(),
            "end_date": (self.start - timedelta(days=1)).isoformat(),
            "price_per_night": "100.00",
        }

        response = self.client.post(self._rates_url(), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_guests_can_read_but_not_write_seasonal_rates(self) -> None:
        read = self.client.get(self._rates_url())
        write = self.client.post(self._rates_url(), {}, format="json")

        self.assertEqual(read.status_code, status.HTTP_200_OK)
        self.assertIn(write.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_manager_blocks_dates(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {
            "start_date": self.start.isoformat(),
            "end_date": (self.start + timedelta(days=2)).isoformat(),
            "reason": RoomBlock.Reason.OWNER_USE,
            "notes": "Family visiting",
        }

        response = self.client.post(self._blocks_url(), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["created_by"], self.owner.id)
        self.assertEqual(response.data["reason_display"], "Owner use")

    def test_blocks_are_private_to_managers(self) -> None:
        response = self.client.get(self._blocks_url())

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_rooms_of_other_tenants_are_not_found(self) -> None:
        stranger = User.objects.create_user(username="stranger", password="StrongPass123")
        other_tenant = Tenant.objects.create(name="Elsewhere", owner=stranger)
        self.client.force_authenticate(self.owner)
        self.client.credentials(HTTP_X_TENANT_ID=str(other_tenant.id))

        response = self.client.get(self._rates_url())

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
