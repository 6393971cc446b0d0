"""
Media Models

Images and files attach to any content entity through a generic foreign key:
`entity_id` holds the owner's primary key and `entity_type` names its table
family (see EntityType). An entity_type of "Site" means the item belongs to
the site itself rather than to a page, product, destination or tour.
"""

import enum

from sqlalchemy import BigInteger, Column, Index, Integer, String

from sitecms.database import AuditMixin, Base, SoftDeleteMixin


class EntityType(str, enum.Enum):
    SITE = "Site"
    PAGE = "Page"
    PRODUCT = "Product"
    DESTINATION = "Destination"
    TOUR = "Tour"


class Image(AuditMixin, SoftDeleteMixin, Base):
    """Image attached to a site or one of its content entities"""

    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)
    image_id = Column(String(100), nullable=False)
    location = Column(String(500), nullable=False)  # public URL or storage path
    alt_text = Column(String, nullable=True)
    title = Column(String, nullable=True)
    file_size = Column(BigInteger, nullable=False, default=0)  # Size in bytes
    mime_type = Column(String, nullable=True)

    # Polymorphic owner
    entity_id = Column(Integer, nullable=False)
    entity_type = Column(String(50), nullable=False)

    __table_args__ = (Index("ix_images_entity", "entity_type", "entity_id"),)

    def __repr__(self):
        return f"<Image(id={self.id}, image_id={self.image_id}, owner={self.entity_type}:{self.entity_id})>"


class File(AuditMixin, SoftDeleteMixin, Base):
    """Downloadable file attached to a site or one of its content entities"""

    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    file_id = Column(String(100), nullable=False)
    location = Column(String(500), nullable=False)
    title = Column(String, nullable=True)
    file_size = Column(BigInteger, nullable=False, default=0)
    mime_type = Column(String, nullable=True)

    entity_id = Column(Integer, nullable=False)
    entity_type = Column(String(50), nullable=False)

    __table_args__ = (Index("ix_files_entity", "entity_type", "entity_id"),)

    def __repr__(self):
        return f"<File(id={self.id}, file_id={self.file_id}, owner={self.entity_type}:{self.entity_id})>"
