"""SQLAlchemy ORM model for the tenants table.

Stores the tenant fields resolution and branding need. Subdomain and
custom domain are stored lowercase and are globally unique.
"""

from sqlalchemy import Boolean, Index, String, true
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table."""

    __tablename__ = "tenants"
    __table_args__ = (
        # Resolution always filters on is_active alongside the lookup field
        Index("ix_tenants_subdomain_active", "subdomain", "is_active"),
        Index("ix_tenants_custom_domain_active", "custom_domain", "is_active"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subdomain: Mapped[str] = mapped_column(String(63), nullable=False, unique=True)
    custom_domain: Mapped[str | None] = mapped_column(
        String(253), nullable=True, unique=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    primary_color: Mapped[str] = mapped_column(String(32), nullable=False)
    secondary_color: Mapped[str] = mapped_column(String(32), nullable=False)
    accent_color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    favicon_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, subdomain={self.subdomain})>"
