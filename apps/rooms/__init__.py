"""Rooms app package.

This app encapsulates the bookable rooms of a tenant: base nightly price,
stay length limits, seasonal rates and manual date blocks, together with
the pricing and calendar endpoints built on the booking domain.
"""
