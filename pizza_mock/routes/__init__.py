"""
Routes package for the mock pizza backend.

This package contains route blueprints:
- api: the JSON endpoints the storefront calls under /api
"""
