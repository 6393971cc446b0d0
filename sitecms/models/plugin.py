"""
Plugin catalog and per-site enablement models.

Plugin mirrors a statically registered content plugin for admin/catalog
purposes; rows are created or refreshed by the catalog sync and are never
removed by it.

SitePlugin is the per-site on/off switch plus an opaque configuration string
that only the owning plugin interprets.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from sitecms.database import AuditMixin, Base, SoftDeleteMixin


class Plugin(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "plugins"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    system_name = Column(String(100), nullable=False, unique=True)  # e.g. "PageManagement"
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    site_plugins = relationship("SitePlugin", back_populates="plugin", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_plugin_is_active", "is_active"),)

    def __repr__(self):
        return f"<Plugin(id={self.id}, system_name={self.system_name})>"


class SitePlugin(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "site_plugins"

    id = Column(Integer, primary_key=True, index=True)
    site_id = Column(Integer, ForeignKey("sites.id", ondelete="CASCADE"), nullable=False)
    plugin_id = Column(Integer, ForeignKey("plugins.id", ondelete="CASCADE"), nullable=False)
    is_enabled = Column(Boolean, nullable=False, default=False)
    configuration = Column(Text, nullable=True)  # usually JSON, owned by the plugin

    site = relationship("Site", back_populates="site_plugins")
    plugin = relationship("Plugin", back_populates="site_plugins")

    __table_args__ = (
        # One live association per (site, plugin); soft-deleted rows don't count
        Index(
            "uq_site_plugin_site_id_plugin_id",
            "site_id",
            "plugin_id",
            unique=True,
            postgresql_where=text("is_deleted = false"),
            sqlite_where=text("is_deleted = 0"),
        ),
        Index("idx_site_plugin_site_enabled", "site_id", "is_enabled"),
    )

    def __repr__(self):
        return f"<SitePlugin(site_id={self.site_id}, plugin_id={self.plugin_id}, enabled={self.is_enabled})>"
