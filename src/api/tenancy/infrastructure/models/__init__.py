"""SQLAlchemy ORM models for the tenancy bounded context."""

from tenancy.infrastructure.models.tenant import TenantModel

__all__ = [
    "TenantModel",
]
