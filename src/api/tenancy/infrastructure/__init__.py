"""Tenant directory adapters (PostgreSQL and hosted API)."""

from tenancy.infrastructure.rest_directory import RestTenantDirectory, tenant_from_record
from tenancy.infrastructure.sql_directory import SqlTenantDirectory

__all__ = [
    "RestTenantDirectory",
    "SqlTenantDirectory",
    "tenant_from_record",
]
