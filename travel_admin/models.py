"""
Database models for the travel agency admin store.

Destinations and packages are maintained by the CRUD dashboard; this service
only reads them. `pdf_audit` rows are written once per generated proposal.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum as SQLEnum,
    Text,
    ForeignKey,
    Float,
    JSON,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from travel_admin.database import Base
import enum


class GenerationType(enum.Enum):
    """How the submitted proposal form was assembled."""
    SCRATCH = "scratch"
    PREPOPULATED = "prepopulated"


class Destination(Base):
    __tablename__ = "destinations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    country = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    hero_image = Column(String(1000), nullable=True)
    status = Column(String(32), nullable=False, default="draft", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    packages = relationship("TourPackage", back_populates="destination")

    def __repr__(self):
        return f"<Destination(id={self.id}, name={self.name}, country={self.country})>"


class TourPackage(Base):
    __tablename__ = "tour_packages"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    slug = Column(String(300), nullable=False, unique=True, index=True)
    short_description = Column(Text, nullable=True)
    long_description = Column(Text, nullable=True)
    duration_days = Column(Integer, nullable=False, default=1)
    duration_nights = Column(Integer, nullable=True)
    price_from = Column(Float, nullable=True)
    price_to = Column(Float, nullable=True)
    currency = Column(String(8), nullable=True)
    inclusions = Column(JSON, nullable=True)
    exclusions = Column(JSON, nullable=True)
    highlights = Column(JSON, nullable=True)
    max_group_size = Column(Integer, nullable=True)
    destination_id = Column(Integer, ForeignKey("destinations.id"), nullable=True, index=True)

    destination = relationship("Destination", back_populates="packages")

    def __repr__(self):
        return f"<TourPackage(id={self.id}, title={self.title})>"


class PdfAudit(Base):
    """One row per generated proposal document. Never updated after insert."""
    __tablename__ = "pdf_audit"

    id = Column(Integer, primary_key=True, index=True)
    admin_user_id = Column(String(200), nullable=False, index=True)
    customer_name = Column(String(300), nullable=False)
    destination_id = Column(Integer, nullable=True)
    package_id = Column(Integer, nullable=True)

    # Snapshot of the submitted form, before enrichment
    form_data = Column(JSON, nullable=False)

    pdf_filename = Column(String(500), nullable=False)
    generation_type = Column(SQLEnum(GenerationType), nullable=False)
    file_size_kb = Column(Integer, nullable=False)
    download_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<PdfAudit(id={self.id}, filename={self.pdf_filename})>"
