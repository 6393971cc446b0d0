"""
Site model: the tenant aggregate root.

Every content entity (pages, products, destinations, media) is scoped to a
Site through `site_id`.
"""

from sqlalchemy import Boolean, Column, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from sitecms.database import AuditMixin, Base, SoftDeleteMixin


class Site(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "sites"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    domain = Column(String(200), nullable=False, unique=True)  # e.g. "travel.example.com"
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    site_plugins = relationship("SitePlugin", back_populates="site", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_site_created_at", "created_at"),)

    def __repr__(self):
        return f"<Site(id={self.id}, domain={self.domain})>"
