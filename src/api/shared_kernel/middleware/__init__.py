"""Shared middleware for cross-cutting concerns.

Holds the TenantContext value object other bounded contexts use to scope
their queries, and the probe recording how it was established.
"""
