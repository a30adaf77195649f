"""
Core utilities shared across the Taskboard API.

This package hosts:
- configuration helpers (env vars, feature flags)
- cross-cutting services such as logging, error formatting, e-mail,
  password/token security and rate limit helpers.

Routers and services depend on these primitives instead of reading the
environment or formatting error payloads themselves.
"""
