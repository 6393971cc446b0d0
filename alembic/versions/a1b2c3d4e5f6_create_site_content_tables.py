"""create_site_content_tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000

Initial schema:
  - `sites` (tenants) and the `plugins` catalog.
  - `site_plugins` enablement rows, unique per (site, plugin) among live rows.
  - Site content: pages/page_contents, products, destinations/tours.
  - `images` and `files` attached to any entity through (entity_type, entity_id).
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _create_base_indexes(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_id"), table, ["id"], unique=False)
    op.create_index(op.f(f"ix_{table}_is_deleted"), table, ["is_deleted"], unique=False)


def _drop_base_indexes(table: str) -> None:
    op.drop_index(op.f(f"ix_{table}_is_deleted"), table_name=table)
    op.drop_index(op.f(f"ix_{table}_id"), table_name=table)


def upgrade() -> None:
    # 1. Tenants and plugin catalog
    op.create_table(
        "sites",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("domain", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("domain"),
    )
    _create_base_indexes("sites")
    op.create_index("idx_site_created_at", "sites", ["created_at"], unique=False)

    op.create_table(
        "plugins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("system_name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("system_name"),
    )
    _create_base_indexes("plugins")
    op.create_index("idx_plugin_is_active", "plugins", ["is_active"], unique=False)

    # 2. Per-site enablement
    op.create_table(
        "site_plugins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("plugin_id", sa.Integer(), nullable=False),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("configuration", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["site_id"], ["sites.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["plugin_id"], ["plugins.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("site_plugins")
    op.create_index(
        "uq_site_plugin_site_id_plugin_id",
        "site_plugins",
        ["site_id", "plugin_id"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
        sqlite_where=sa.text("is_deleted = 0"),
    )
    op.create_index("idx_site_plugin_site_enabled", "site_plugins", ["site_id", "is_enabled"], unique=False)

    # 3. Pages
    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("page_id", sa.String(100), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["site_id"], ["sites.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("pages")
    op.create_index(op.f("ix_pages_site_id"), "pages", ["site_id"], unique=False)
    op.create_index(op.f("ix_pages_page_id"), "pages", ["page_id"], unique=False)
    op.create_index("uq_page_site_id_page_id", "pages", ["site_id", "page_id"], unique=True)

    op.create_table(
        "page_contents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("page_id", sa.Integer(), nullable=False),
        sa.Column("content_id", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["page_id"], ["pages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("page_contents")
    op.create_index(op.f("ix_page_contents_page_id"), "page_contents", ["page_id"], unique=False)

    # 4. Products
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["site_id"], ["sites.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("products")
    op.create_index(op.f("ix_products_site_id"), "products", ["site_id"], unique=False)
    op.create_index(op.f("ix_products_product_id"), "products", ["product_id"], unique=False)
    op.create_index("uq_product_site_id_product_id", "products", ["site_id", "product_id"], unique=True)

    # 5. Travel
    op.create_table(
        "destinations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("destination_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["site_id"], ["sites.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("destinations")
    op.create_index(op.f("ix_destinations_site_id"), "destinations", ["site_id"], unique=False)
    op.create_index(op.f("ix_destinations_destination_id"), "destinations", ["destination_id"], unique=False)
    op.create_index(
        "uq_destination_site_id_destination_id", "destinations", ["site_id", "destination_id"], unique=True
    )

    op.create_table(
        "tours",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("destination_id", sa.Integer(), nullable=False),
        sa.Column("tour_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["destination_id"], ["destinations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("tours")
    op.create_index(op.f("ix_tours_destination_id"), "tours", ["destination_id"], unique=False)

    # 6. Media (polymorphic owner)
    op.create_table(
        "images",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("image_id", sa.String(100), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("alt_text", sa.String(), nullable=True),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("mime_type", sa.String(), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("images")
    op.create_index("ix_images_entity", "images", ["entity_type", "entity_id"], unique=False)

    op.create_table(
        "files",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("file_id", sa.String(100), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("mime_type", sa.String(), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    _create_base_indexes("files")
    op.create_index("ix_files_entity", "files", ["entity_type", "entity_id"], unique=False)


def downgrade() -> None:
    # Reverse in dependency order: children before parents
    op.drop_index("ix_files_entity", table_name="files")
    _drop_base_indexes("files")
    op.drop_table("files")

    op.drop_index("ix_images_entity", table_name="images")
    _drop_base_indexes("images")
    op.drop_table("images")

    op.drop_index(op.f("ix_tours_destination_id"), table_name="tours")
    _drop_base_indexes("tours")
    op.drop_table("tours")

    op.drop_index("uq_destination_site_id_destination_id", table_name="destinations")
    op.drop_index(op.f("ix_destinations_destination_id"), table_name="destinations")
    op.drop_index(op.f("ix_destinations_site_id"), table_name="destinations")
    _drop_base_indexes("destinations")
    op.drop_table("destinations")

    op.drop_index("uq_product_site_id_product_id", table_name="products")
    op.drop_index(op.f("ix_products_product_id"), table_name="products")
    op.drop_index(op.f("ix_products_site_id"), table_name="products")
    _drop_base_indexes("products")
    op.drop_table("products")

    op.drop_index(op.f("ix_page_contents_page_id"), table_name="page_contents")
    _drop_base_indexes("page_contents")
    op.drop_table("page_contents")

    op.drop_index("uq_page_site_id_page_id", table_name="pages")
    op.drop_index(op.f("ix_pages_page_id"), table_name="pages")
    op.drop_index(op.f("ix_pages_site_id"), table_name="pages")
    _drop_base_indexes("pages")
    op.drop_table("pages")

    op.drop_index("idx_site_plugin_site_enabled", table_name="site_plugins")
    op.drop_index("uq_site_plugin_site_id_plugin_id", table_name="site_plugins")
    _drop_base_indexes("site_plugins")
    op.drop_table("site_plugins")

    op.drop_index("idx_plugin_is_active", table_name="plugins")
    _drop_base_indexes("plugins")
    op.drop_table("plugins")

    op.drop_index("idx_site_created_at", table_name="sites")
    _drop_base_indexes("sites")
    op.drop_table("sites")
