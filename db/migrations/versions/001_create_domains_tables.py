"""Tenancy: domains + domain_settings.

- domains: one row per tenant hostname (unique), site_type checked
- domain_settings: key/value rows flattened into DomainConfig.settings
- updated_at touch trigger on domains (PostgreSQL only)
"""

from __future__ import annotations
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "001_create_domains"
down_revision = None
branch_labels = None
depends_on = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    op.create_table(
        "domains",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("domain", sa.String(253), nullable=False),
        sa.Column("site_type", sa.String(20), nullable=False, server_default=sa.text("'custom'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("custom_branding", _JSON, nullable=True),
        sa.Column("owner_user_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("domain", name="uq_domains__domain"),
        sa.CheckConstraint(
            "site_type IN ('bigbased', 'basedbook', 'custom')",
            name="ck_domains__site_type",
        ),
    )
    op.create_index("ix_domains__active_domain", "domains", ["domain", "is_active"])

    op.create_table(
        "domain_settings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "domain_id",
            sa.Integer(),
            sa.ForeignKey("domains.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("setting_key", sa.String(100), nullable=False),
        sa.Column("setting_value", _JSON, nullable=True),
        sa.UniqueConstraint("domain_id", "setting_key", name="uq_domain_settings__domain_key"),
    )
    op.create_index("ix_domain_settings_domain_id", "domain_settings", ["domain_id"])

    if op.get_bind().dialect.name == "postgresql":
        op.execute("""
        CREATE OR REPLACE FUNCTION set_updated_at() RETURNS trigger
        LANGUAGE plpgsql AS $$
        BEGIN
          NEW.updated_at := NOW();
          RETURN NEW;
        END;
        $$;
        """)
        op.execute("""
        CREATE TRIGGER trg_domains_updated_at
        BEFORE UPDATE ON domains
        FOR EACH ROW EXECUTE FUNCTION set_updated_at();
        """)


def downgrade():
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS trg_domains_updated_at ON domains;")
        op.execute("DROP FUNCTION IF EXISTS set_updated_at();")
    op.drop_index("ix_domain_settings_domain_id", table_name="domain_settings")
    op.drop_table("domain_settings")
    op.drop_index("ix_domains__active_domain", table_name="domains")
    op.drop_table("domains")
