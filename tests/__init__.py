"""
Test suite for the support-site UI flows and the test-case sync.

This package contains:
- e2e/: Browser scenarios against the live support site (Playwright)
- unit/: Fast tests for the sync package, page-object wiring and helpers
"""
