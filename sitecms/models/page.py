from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from sitecms.database import AuditMixin, Base, SoftDeleteMixin


class Page(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True)
    site_id = Column(Integer, ForeignKey("sites.id", ondelete="CASCADE"), nullable=False, index=True)
    page_id = Column(String(100), nullable=False, index=True)  # site-local key, e.g. "about-us"
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)

    contents = relationship(
        "PageContent",
        back_populates="page",
        cascade="all, delete-orphan",
        order_by="PageContent.order",
    )

    __table_args__ = (Index("uq_page_site_id_page_id", "site_id", "page_id", unique=True),)


class PageContent(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "page_contents"

    id = Column(Integer, primary_key=True, index=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True)
    content_id = Column(String(100), nullable=False)
    content = Column(Text, nullable=False, default="")  # sanitized HTML
    order = Column(Integer, nullable=False, default=0)

    page = relationship("Page", back_populates="contents")
