"""
Browser test package for the JWT Pizza storefront.

This package contains Playwright-based browser tests and demonstrates:
- Page Object Model (POM) pattern
- Backend mocking through route interception
- Role- and text-based locator strategies
- User flow testing
"""
