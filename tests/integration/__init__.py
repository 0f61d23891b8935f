"""
API test package for the mock pizza backend.

This package contains tests for the mock REST endpoints.
Tests use the Flask test client and demonstrate:
- Authentication and session testing
- CRUD operation testing
- Error contract testing (401, 404, 400)
"""
