"""Bookings app package.

This app encapsulates the booking domain: the pure date-selection,
calendar-grid and pricing logic under ``domain``, the booking model with
its per-night and add-on lines, and the services that check conflicts,
price stays and create bookings inside a database transaction.
"""
