"""Add-ons app package.

Extras a guest can buy with a stay (breakfast, airport transfer, wine
tasting), priced per booking, per night, per guest or per guest-night.
"""
