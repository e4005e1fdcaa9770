"""
Shared utilities for the AR.IO gateway selector.

This package aggregates common building blocks:

- config: Configuration via pydantic-settings
- logging: Structured logging with structlog
- metrics: Prometheus metrics helpers
- errors: Canonical error types
- test_helpers: Gateway registry factories for tests

Do not import from argateway into shared/.
"""
