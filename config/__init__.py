"""Top-level package for Django configuration.

This package holds the settings modules for the Vilo platform and the
WSGI entry point.
"""
