"""create tenants table

Revision ID: a3c5e7f90b12
Revises:
Create Date: 2026-10-12 09:41:07.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "a3c5e7f90b12"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("subdomain", sa.String(length=63), nullable=False),
        sa.Column("custom_domain", sa.String(length=253), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.true(), nullable=False
        ),
        sa.Column("primary_color", sa.String(length=32), nullable=False),
        sa.Column("secondary_color", sa.String(length=32), nullable=False),
        sa.Column("accent_color", sa.String(length=32), nullable=True),
        sa.Column("logo_url", sa.String(length=2048), nullable=True),
        sa.Column("favicon_url", sa.String(length=2048), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tenants")),
        sa.UniqueConstraint("subdomain", name=op.f("uq_tenants_subdomain")),
        sa.UniqueConstraint("custom_domain", name=op.f("uq_tenants_custom_domain")),
    )
    # Resolution filters on is_active alongside the lookup field
    op.create_index(
        "ix_tenants_subdomain_active", "tenants", ["subdomain", "is_active"]
    )
    op.create_index(
        "ix_tenants_custom_domain_active", "tenants", ["custom_domain", "is_active"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_tenants_custom_domain_active", table_name="tenants")
    op.drop_index("ix_tenants_subdomain_active", table_name="tenants")
    op.drop_table("tenants")
