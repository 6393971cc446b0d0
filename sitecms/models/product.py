from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Numeric, String, Text

from sitecms.database import AuditMixin, Base, SoftDeleteMixin


class Product(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    site_id = Column(Integer, ForeignKey("sites.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(100), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(18, 2), nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("uq_product_site_id_product_id", "site_id", "product_id", unique=True),)
