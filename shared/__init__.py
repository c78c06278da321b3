"""
Shared utilities for the Geocoder Proxy.

This package aggregates common building blocks consumed by services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- tracing: OpenTelemetry tracing config
- errors: Canonical error types and responses
- base_service: FastAPI app scaffolding (middleware, health, metrics)

Do not import from service_* packages into shared/.
"""
