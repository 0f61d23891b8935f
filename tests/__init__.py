"""
Test suite for the JWT Pizza storefront and its mock backend.

This package contains:
- unit/: Backend operations, state and tokens without HTTP
- integration/: Mock API endpoints through the Flask test client
- mocks/: Playwright route interception against test doubles
- e2e/: Browser flows against a running storefront using Playwright
"""
