"""
XtreamTV Test Suite

Test Categories:
- unit/: Fast, isolated unit tests
- integration/: HTTP API tests against a fake provider
- fixtures/: Shared test data and mocks
"""
