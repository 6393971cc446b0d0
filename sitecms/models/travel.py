"""Travel content: destinations and the tours offered at each of them."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from sitecms.database import AuditMixin, Base, SoftDeleteMixin


class Destination(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "destinations"

    id = Column(Integer, primary_key=True, index=True)
    site_id = Column(Integer, ForeignKey("sites.id", ondelete="CASCADE"), nullable=False, index=True)
    destination_id = Column(String(100), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)

    tours = relationship("Tour", back_populates="destination", cascade="all, delete-orphan", order_by="Tour.id")

    __table_args__ = (
        Index("uq_destination_site_id_destination_id", "site_id", "destination_id", unique=True),
    )


class Tour(AuditMixin, SoftDeleteMixin, Base):
    __tablename__ = "tours"

    id = Column(Integer, primary_key=True, index=True)
    destination_id = Column(
        Integer, ForeignKey("destinations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tour_id = Column(String(100), nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(18, 2), nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False)

    destination = relationship("Destination", back_populates="tours")
