"""
Shared utilities for the Masa MCP service.

This package aggregates the building blocks used by the service package:

- config: Settings via pydantic-settings
- logging: Structured logging with correlation context
- metrics: Prometheus metrics helpers
- errors: Canonical error types
- retry: Retry policy and bounded retry loop

Do not import from service_* packages into shared/.
"""
