"""
Route-interception tests for the mock pizza backend.

This package uses unittest.mock doubles of Playwright's ``Route`` and
``Page`` to check how intercepted browser requests are relayed into the
mock application, without launching a browser.
"""
