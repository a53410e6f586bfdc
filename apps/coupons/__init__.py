"""Coupons app package.

Promotional codes a tenant hands out: percentage, fixed amount or free
nights, optionally limited to rooms, dates, usage counts and minimum stays.
"""
