"""CRUD helper functions used by the API routers."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload

from . import analytics, models, schemas
from .config import settings
from .constants import DEFAULT_HERO, DEFAULT_PROGRAMS, DEFAULT_SECTIONS
from .exceptions import BackendUnavailableError
from .site_config import SiteConfiguration, load_site_configuration
from .utils import remove_media_file

logger = logging.getLogger(__name__)


def _ensure_unique_value(
    session: Session, column: Any, value: str, *, exclude_id: Optional[int] = None
) -> str:
    base = value
    counter = 1
    model = column.class_
    while True:
        statement = select(model.id).where(column == value)
        if exclude_id is not None:
            statement = statement.where(model.id != exclude_id)
        if not session.scalar(statement):
            return value
        value = f"{base}-{counter}"
        counter += 1


# Program helpers


def create_program(session: Session, program_in: schemas.ProgramCreate) -> models.Program:
    data = program_in.model_dump()
    data["slug"] = _ensure_unique_value(session, models.Program.slug, data["slug"])
    program = models.Program(**data)
    session.add(program)
    session.flush()
    logger.info("Created program %s (%s)", program.id, program.slug)
    return program


def list_programs(session: Session, *, only_published: bool = False) -> Sequence[models.Program]:
    statement = select(models.Program).order_by(models.Program.display_order, models.Program.id)
    if only_published:
        statement = statement.where(models.Program.is_published.is_(True))
    return session.scalars(statement).all()


def get_program(session: Session, program_id: int) -> models.Program | None:
    return session.get(models.Program, program_id)


def update_program(
    session: Session, program: models.Program, program_in: schemas.ProgramCreate
) -> models.Program:
    data = program_in.model_dump()
    data["slug"] = _ensure_unique_value(
        session, models.Program.slug, data["slug"], exclude_id=program.id
    )
    for field, value in data.items():
        setattr(program, field, value)
    session.add(program)
    session.flush()
    logger.info("Updated program %s", program.id)
    return program


def set_program_published(
    session: Session, program: models.Program, is_published: bool
) -> models.Program:
    program.is_published = is_published
    session.add(program)
    session.flush()
    return program


def delete_program(session: Session, program: models.Program) -> None:
    session.delete(program)
    session.flush()
    logger.info("Deleted program %s", program.id)


# Dynamic section helpers


def create_section(session: Session, section_in: schemas.SectionCreate) -> models.DynamicSection:
    data = section_in.model_dump()
    data["section_key"] = _ensure_unique_value(
        session, models.DynamicSection.section_key, data["section_key"]
    )
    section = models.DynamicSection(**data)
    session.add(section)
    session.flush()
    logger.info("Created section %s (%s)", section.id, section.section_key)
    return section


def list_sections(session: Session, *, only_visible: bool = False) -> Sequence[models.DynamicSection]:
    statement = select(models.DynamicSection).order_by(
        models.DynamicSection.display_order, models.DynamicSection.id
    )
    if only_visible:
        statement = statement.where(models.DynamicSection.is_visible.is_(True))
    return session.scalars(statement).all()


def get_section(session: Session, section_id: int) -> models.DynamicSection | None:
    return session.get(models.DynamicSection, section_id)


def update_section(
    session: Session, section: models.DynamicSection, section_in: schemas.SectionCreate
) -> models.DynamicSection:
    data = section_in.model_dump()
    data["section_key"] = _ensure_unique_value(
        session, models.DynamicSection.section_key, data["section_key"], exclude_id=section.id
    )
    for field, value in data.items():
        setattr(section, field, value)
    session.add(section)
    session.flush()
    logger.info("Updated section %s", section.id)
    return section


def set_section_visibility(
    session: Session, section: models.DynamicSection, is_visible: bool
) -> models.DynamicSection:
    section.is_visible = is_visible
    session.add(section)
    session.flush()
    return section


def delete_section(session: Session, section: models.DynamicSection) -> None:
    session.delete(section)
    session.flush()
    logger.info("Deleted section %s", section.id)


# Booking helpers


def create_booking(session: Session, booking_in: schemas.BookingCreate) -> models.Booking:
    booking = models.Booking(**booking_in.model_dump(), status="new")
    session.add(booking)
    session.flush()
    return booking


def submit_booking(
    session: Optional[Session], booking_in: schemas.BookingCreate
) -> models.Booking | None:
    """Persist a validated public booking request.

    Without a configured backend the request is acknowledged without being
    stored, unless ``ACCEPT_BOOKINGS_WITHOUT_BACKEND`` is turned off.
    """

    if session is None:
        if not settings.accept_bookings_without_backend:
            raise BackendUnavailableError()
        logger.warning(
            "Booking from %s acknowledged without persistence: backend not configured",
            booking_in.email,
        )
        return None
    booking = create_booking(session, booking_in)
    logger.info("Recorded booking %s for program %s", booking.id, booking.program_id)
    return booking


def _booking_list_item(booking: models.Booking) -> schemas.BookingListItem:
    item = schemas.BookingListItem.model_validate(booking)
    if booking.program is not None:
        item.program_title = booking.program.title
        item.program_price_eur = (
            float(booking.program.price_eur) if booking.program.price_eur is not None else None
        )
        item.program_price_dzd = (
            float(booking.program.price_dzd) if booking.program.price_dzd is not None else None
        )
    return item


def list_bookings(
    session: Session, *, status: Optional[str] = None, search: Optional[str] = None
) -> list[schemas.BookingListItem]:
    statement = (
        select(models.Booking)
        .options(selectinload(models.Booking.program))
        .order_by(models.Booking.created_at.desc(), models.Booking.id.desc())
    )
    if status:
        statement = statement.where(models.Booking.status == status)
    if search:
        pattern = f"%{search.lower()}%"
        statement = statement.where(
            or_(
                func.lower(models.Booking.full_name).like(pattern),
                func.lower(models.Booking.email).like(pattern),
            )
        )
    return [_booking_list_item(booking) for booking in session.scalars(statement).all()]


def get_booking(session: Session, booking_id: int) -> models.Booking | None:
    return session.get(models.Booking, booking_id)


def update_booking_status(session: Session, booking: models.Booking, status: str) -> models.Booking:
    previous = booking.status
    booking.status = status
    session.add(booking)
    session.flush()
    logger.info("Booking %s status %s -> %s", booking.id, previous, status)
    return booking


def program_price_map(session: Session) -> dict[int, models.Program]:
    return {program.id: program for program in list_programs(session)}


def dashboard_overview(
    session: Session, start: date, end: date, *, now: Optional[datetime] = None
) -> schemas.DashboardOverview:
    now = now or datetime.utcnow()
    if end < start:
        start, end = end, start
    in_range = session.scalars(
        select(models.Booking).where(
            models.Booking.created_at >= datetime.combine(start, time.min),
            models.Booking.created_at <= datetime.combine(end, time.max),
        )
    ).all()
    metrics = analytics.compute_booking_metrics(in_range, program_price_map(session), start, end)

    recent = session.scalars(
        select(models.Booking).where(models.Booking.created_at >= now - timedelta(days=30))
    ).all()
    recent_bookings = list_bookings(session)[:5]
    published_programs = session.scalar(
        select(func.count(models.Program.id)).where(models.Program.is_published.is_(True))
    )
    visible_sections = session.scalar(
        select(func.count(models.DynamicSection.id)).where(
            models.DynamicSection.is_visible.is_(True)
        )
    )
    return schemas.DashboardOverview(
        start=start,
        end=end,
        metrics=metrics,
        bookings_last_7=analytics.count_created_since(recent, now - timedelta(days=7)),
        bookings_last_30=analytics.count_created_since(recent, now - timedelta(days=30)),
        published_programs=int(published_programs or 0),
        visible_sections=int(visible_sections or 0),
        recent_bookings=recent_bookings,
    )


# Site settings & hero


def upsert_site_setting(session: Session, *, key: str, value: Any) -> models.SiteSetting:
    now = datetime.utcnow()
    dialect = session.get_bind().dialect.name
    if dialect in ("sqlite", "postgresql"):
        insert = sqlite_insert if dialect == "sqlite" else postgresql_insert
        statement = insert(models.SiteSetting).values(
            key=key, value=value, created_at=now, updated_at=now
        )
        statement = statement.on_conflict_do_update(
            index_elements=[models.SiteSetting.key],
            set_={"value": statement.excluded["value"], "updated_at": now},
        )
        session.execute(statement)
    else:
        # Best effort on dialects without a native upsert: not atomic across writers.
        setting = session.scalars(
            select(models.SiteSetting).where(models.SiteSetting.key == key)
        ).first()
        if setting:
            setting.value = value
        else:
            setting = models.SiteSetting(key=key, value=value)
        session.add(setting)
    session.flush()
    logger.info("Upserted site setting %s", key)
    return session.scalars(
        select(models.SiteSetting)
        .where(models.SiteSetting.key == key)
        .execution_options(populate_existing=True)
    ).one()


def list_site_settings(session: Session) -> Sequence[models.SiteSetting]:
    statement = select(models.SiteSetting).order_by(models.SiteSetting.key)
    return session.scalars(statement).all()


def get_site_configuration(session: Optional[Session]) -> SiteConfiguration:
    if session is None:
        return load_site_configuration({})
    return load_site_configuration(
        {setting.key: setting.value for setting in list_site_settings(session)}
    )


def get_hero_settings(session: Optional[Session]) -> schemas.HeroSettings:
    hero = None
    if session is not None:
        hero = session.scalars(select(models.HeroSettings).order_by(models.HeroSettings.id)).first()
    if hero is None:
        return schemas.HeroSettings(**DEFAULT_HERO)
    return schemas.HeroSettings.model_validate(hero)


def update_hero_settings(
    session: Session, payload: schemas.HeroSettingsUpdate
) -> schemas.HeroSettings:
    hero = session.scalars(select(models.HeroSettings).order_by(models.HeroSettings.id)).first()
    if hero is None:
        hero = models.HeroSettings(**payload.model_dump())
    else:
        for field, value in payload.model_dump().items():
            setattr(hero, field, value)
    session.add(hero)
    session.flush()
    return schemas.HeroSettings.model_validate(hero)


# Public content


def get_public_content(session: Optional[Session]) -> dict[str, Any]:
    """Hero, published programs and visible sections, with built-in fallbacks."""

    if session is None:
        return {
            "hero": schemas.HeroSettings(**DEFAULT_HERO),
            "programs": list(DEFAULT_PROGRAMS),
            "sections": list(DEFAULT_SECTIONS),
            "site": load_site_configuration({}),
        }
    return {
        "hero": get_hero_settings(session),
        "programs": list(list_programs(session, only_published=True)),
        "sections": list(list_sections(session, only_visible=True)),
        "site": get_site_configuration(session),
    }


# Media helpers


def create_media_item(
    session: Session,
    *,
    file_name: str,
    file_url: str,
    file_type: str,
    file_size: int,
    storage_path: str | None = None,
    width: int | None = None,
    height: int | None = None,
    alt_text: str | None = None,
) -> models.MediaItem:
    item = models.MediaItem(
        file_name=file_name,
        file_url=file_url,
        file_type=file_type,
        file_size=file_size,
        storage_path=storage_path,
        width=width,
        height=height,
        alt_text=alt_text,
    )
    session.add(item)
    session.flush()
    return item


def list_media_items(session: Session, *, kind: Optional[str] = None) -> Sequence[models.MediaItem]:
    statement = select(models.MediaItem).order_by(
        models.MediaItem.created_at.desc(), models.MediaItem.id.desc()
    )
    if kind in ("image", "audio"):
        statement = statement.where(models.MediaItem.file_type.like(f"{kind}/%"))
    return session.scalars(statement).all()


def get_media_item(session: Session, item_id: int) -> models.MediaItem | None:
    return session.get(models.MediaItem, item_id)


def update_media_item(
    session: Session, item: models.MediaItem, payload: schemas.MediaItemUpdate
) -> models.MediaItem:
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(item, field, value)
    session.add(item)
    session.flush()
    return item


def delete_media_item(session: Session, item: models.MediaItem) -> None:
    storage_path = item.storage_path
    session.delete(item)
    session.flush()
    remove_media_file(storage_path)
