"""SQLAlchemy models for the Gnawa Tours site."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .constants import BOOKING_STATUSES, DIFFICULTIES, LAYOUT_TYPES
from .database import Base


def _one_of(column: str, values: tuple[str, ...]) -> str:
    options = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({options})"


class TimestampMixin:
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Program(Base, TimestampMixin):
    __tablename__ = "programs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    duration = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    price_eur = Column(Numeric(12, 2), nullable=True, default=0)
    price_dzd = Column(Numeric(14, 2), nullable=True, default=0)
    difficulty = Column(String(20), nullable=False, default="moderate")
    highlights = Column(JSON, nullable=False, default=list)
    itinerary = Column(JSON, nullable=False, default=list)
    gallery_urls = Column(JSON, nullable=False, default=list)
    cover_image = Column(String(500), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False)

    bookings = relationship("Booking", back_populates="program")

    __table_args__ = (
        CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_programs_dates",
        ),
        CheckConstraint(_one_of("difficulty", DIFFICULTIES), name="ck_programs_difficulty"),
    )


class DynamicSection(Base, TimestampMixin):
    __tablename__ = "dynamic_sections"

    id = Column(Integer, primary_key=True, index=True)
    section_key = Column(String(120), nullable=False, unique=True)
    title = Column(String(200), nullable=False)
    nav_title = Column(String(120), nullable=False)
    subtitle = Column(String(300), nullable=True)
    layout_type = Column(
        String(20), nullable=False, default="centered", doc="Selects the content schema and renderer"
    )
    content = Column(JSON, nullable=False, default=dict)
    background_image = Column(String(500), nullable=True)
    is_visible = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(_one_of("layout_type", LAYOUT_TYPES), name="ck_sections_layout_type"),
    )


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    program_id = Column(Integer, ForeignKey("programs.id", ondelete="SET NULL"), nullable=True)
    full_name = Column(String(150), nullable=False)
    email = Column(String(150), nullable=False)
    phone = Column(String(50), nullable=True)
    group_size = Column(Integer, nullable=False, default=1)
    message = Column(Text, nullable=True)
    origin_country = Column(String(10), nullable=False, default="INTL")
    status = Column(String(20), nullable=False, default="new")

    program = relationship("Program", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("group_size >= 1 AND group_size <= 20", name="ck_bookings_group_size"),
        CheckConstraint(_one_of("status", BOOKING_STATUSES), name="ck_bookings_status"),
    )


class SiteSetting(Base, TimestampMixin):
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(120), nullable=False, unique=True)
    value = Column(JSON, nullable=True)


class HeroSettings(Base, TimestampMixin):
    __tablename__ = "hero_settings"

    id = Column(Integer, primary_key=True, index=True)
    headline = Column(String(200), nullable=False)
    subheadline = Column(Text, nullable=False, default="")
    cta_text = Column(String(120), nullable=False, default="")
    background_image = Column(String(500), nullable=True)
    overlay_opacity = Column(Float, nullable=False, default=0.45)


class MediaItem(Base):
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    file_name = Column(String(255), nullable=False)
    file_url = Column(String(500), nullable=False)
    file_type = Column(String(100), nullable=True)
    file_size = Column(Integer, nullable=True)
    storage_path = Column(String(500), nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    alt_text = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
