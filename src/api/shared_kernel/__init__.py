"""Shared kernel for the helpdesk backend.

Small pieces every bounded context may import: the request TenantContext
that scopes tenant data, and the ObservationContext probes attach to
their log events. Nothing here may import from a bounded context.
"""
