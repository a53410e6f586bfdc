"""Pure booking domain: calendar grids, stay selection and pricing.

Nothing in this package touches the database or the request cycle; the
services in ``apps.bookings.services`` feed it data already loaded from
the ORM.
"""
