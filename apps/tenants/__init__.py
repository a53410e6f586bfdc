"""Tenants app package.

A tenant is one hospitality business (guest house, B&B) using Vilo. Rooms,
add-ons, coupons and bookings all belong to exactly one tenant, and every
tenant-scoped request carries an explicit TenantContext.
"""
