"""Pydantic schemas powering the Gnawa Tours API."""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .constants import DEFAULT_ORIGIN_COUNTRY, MAX_GROUP_SIZE, MIN_GROUP_SIZE

Difficulty = Literal["easy", "moderate", "challenging", "expert"]
LayoutType = Literal["text-left", "text-right", "centered", "full-bleed", "grid"]
BookingStatus = Literal["new", "contacted", "confirmed", "cancelled"]


def slugify(value: str) -> str:
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    value = re.sub(r"-+", "-", value)
    return value.strip("-")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _coerce_number(value: Any) -> Any:
    """Parse a price field; unparseable input becomes 0, negatives are left for ``ge``."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return 0


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _clean_itinerary(value: Any) -> List[Dict[str, Any]]:
    # Entries without a numeric day or a title are discarded.
    if not isinstance(value, list):
        return []
    kept: List[Dict[str, Any]] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        day = entry.get("day")
        title = entry.get("title")
        if isinstance(day, bool) or not isinstance(day, (int, float)) or not math.isfinite(day):
            continue
        if not isinstance(title, str) or not title.strip():
            continue
        description = entry.get("description")
        kept.append(
            {
                "day": int(day),
                "title": title.strip(),
                "description": description if isinstance(description, str) else "",
            }
        )
    return kept


class TimestampMixin(BaseModel):
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ActionResult(BaseModel):
    success: bool = True
    id: Optional[int] = None


class ErrorResponse(BaseModel):
    error: str


# Programs


class ItineraryDay(BaseModel):
    day: int = Field(..., gt=0)
    title: str
    description: str = ""


class ProgramBase(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, description="Unique URL-safe identifier")
    description: Optional[str] = None
    duration: str = Field(..., min_length=1, description="Free text such as '5 days / 4 nights'")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    price_eur: float = Field(0, ge=0)
    price_dzd: float = Field(0, ge=0)
    difficulty: Difficulty
    highlights: List[str] = Field(default_factory=list)
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    gallery_urls: List[str] = Field(default_factory=list)
    cover_image: Optional[str] = None
    display_order: int = 0
    is_published: bool = False


class ProgramCreate(ProgramBase):
    """Editor input for a program, normalized before persistence."""

    @field_validator("title", "duration", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, value: Any) -> Any:
        return slugify(value) if isinstance(value, str) else value

    @field_validator("description", "cover_image", "start_date", "end_date", mode="before")
    @classmethod
    def blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("price_eur", "price_dzd", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Any:
        return _coerce_number(value)

    @field_validator("display_order", mode="before")
    @classmethod
    def coerce_display_order(cls, value: Any) -> int:
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0

    @field_validator("highlights", "gallery_urls", mode="before")
    @classmethod
    def keep_non_empty_strings(cls, value: Any) -> List[str]:
        return _string_list(value)

    @field_validator("itinerary", mode="before")
    @classmethod
    def drop_untitled_days(cls, value: Any) -> List[Any]:
        return _clean_itinerary(value)

    @field_validator("end_date")
    @classmethod
    def validate_date_range(cls, end_date: Optional[date], info: ValidationInfo) -> Optional[date]:
        start_date = info.data.get("start_date")
        if start_date and end_date and end_date < start_date:
            raise ValueError("end_date must be greater than or equal to start_date")
        return end_date


class Program(ProgramBase, TimestampMixin):
    id: int
    price_eur: Optional[float] = None
    price_dzd: Optional[float] = None


class PublicProgram(BaseModel):
    """Program as shown on the public site, stored or built-in.

    Rows may have been written outside the editor, so every field degrades to
    an empty or absent value instead of failing validation.
    """

    id: Optional[int] = None
    title: str = ""
    slug: str = ""
    description: Optional[str] = None
    duration: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    price_eur: Optional[float] = None
    price_dzd: Optional[float] = None
    difficulty: str = ""
    highlights: List[str] = Field(default_factory=list)
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    gallery_urls: List[str] = Field(default_factory=list)
    cover_image: Optional[str] = None
    display_order: int = 0
    is_published: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator("title", "slug", "duration", "difficulty", mode="before")
    @classmethod
    def text_or_empty(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("description", "cover_image", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> Optional[str]:
        return _blank_to_none(value) if isinstance(value, str) else None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def lenient_date(cls, value: Any) -> Optional[date]:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip()[:10])
            except ValueError:
                return None
        return None

    @field_validator("price_eur", "price_dzd", mode="before")
    @classmethod
    def lenient_price(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        return float(_coerce_number(value))

    @field_validator("highlights", "gallery_urls", mode="before")
    @classmethod
    def keep_strings(cls, value: Any) -> List[str]:
        return _string_list(value)

    @field_validator("itinerary", mode="before")
    @classmethod
    def keep_valid_days(cls, value: Any) -> List[Dict[str, Any]]:
        return [entry for entry in _clean_itinerary(value) if entry["day"] > 0]

    @field_validator("display_order", mode="before")
    @classmethod
    def lenient_order(cls, value: Any) -> int:
        if isinstance(value, bool):
            return 0
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0

    @field_validator("is_published", mode="before")
    @classmethod
    def lenient_flag(cls, value: Any) -> bool:
        return value if isinstance(value, bool) else False


class PublishToggle(BaseModel):
    is_published: bool


# Dynamic sections


class SectionCreate(BaseModel):
    """Wrapper fields of a dynamic section; ``content`` is shaped by the caller."""

    section_key: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    nav_title: str = ""
    subtitle: Optional[str] = None
    layout_type: LayoutType
    content: Dict[str, Any] = Field(default_factory=dict)
    background_image: Optional[str] = None
    is_visible: bool = True
    display_order: int = 0

    @field_validator("section_key", mode="before")
    @classmethod
    def normalize_key(cls, value: Any) -> Any:
        return slugify(value) if isinstance(value, str) else value

    @field_validator("title", "nav_title", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("subtitle", "background_image", mode="before")
    @classmethod
    def blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("display_order", mode="before")
    @classmethod
    def coerce_display_order(cls, value: Any) -> int:
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0

    @model_validator(mode="after")
    def default_nav_title(self) -> "SectionCreate":
        if not self.nav_title:
            self.nav_title = self.title
        return self


class Section(TimestampMixin):
    id: int
    section_key: str
    title: str
    nav_title: str
    subtitle: Optional[str] = None
    layout_type: str
    content: Any = None
    background_image: Optional[str] = None
    is_visible: bool
    display_order: int


class VisibilityToggle(BaseModel):
    is_visible: bool


# Bookings


class BookingCreate(BaseModel):
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: Optional[str] = None
    program_id: Optional[int] = None
    group_size: int = Field(1, ge=MIN_GROUP_SIZE, le=MAX_GROUP_SIZE, strict=True)
    message: Optional[str] = None
    origin_country: str = DEFAULT_ORIGIN_COUNTRY

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone", "program_id", "message", mode="before")
    @classmethod
    def blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("group_size", mode="before")
    @classmethod
    def default_group_size(cls, value: Any) -> Any:
        return 1 if value is None else value

    @field_validator("origin_country", mode="before")
    @classmethod
    def normalize_origin(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_ORIGIN_COUNTRY
        return value.strip().upper()


class Booking(TimestampMixin):
    id: int
    program_id: Optional[int] = None
    full_name: str
    email: str
    phone: Optional[str] = None
    group_size: int
    message: Optional[str] = None
    origin_country: Optional[str] = None
    status: str


class BookingListItem(Booking):
    program_title: Optional[str] = None
    program_price_eur: Optional[float] = None
    program_price_dzd: Optional[float] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


# Dashboard


class SeriesBucket(BaseModel):
    label: str
    start: date
    end: date
    count: int = 0
    revenue_eur: float = 0
    revenue_dzd: float = 0


class BookingMetrics(BaseModel):
    total_bookings: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    pipeline_value_eur: float = 0
    pipeline_value_dzd: float = 0
    confirmed_value_eur: float = 0
    confirmed_value_dzd: float = 0
    average_group_size: float = 0
    conversion_rate: float = 0
    granularity: Literal["day", "week", "month"] = "day"
    series: List[SeriesBucket] = Field(default_factory=list)


class DashboardOverview(BaseModel):
    start: date
    end: date
    metrics: BookingMetrics
    bookings_last_7: int = 0
    bookings_last_30: int = 0
    published_programs: int = 0
    visible_sections: int = 0
    recent_bookings: List[BookingListItem] = Field(default_factory=list)


# Site settings & hero


class SiteSetting(TimestampMixin):
    id: int
    key: str
    value: Any = None


class SiteSettingUpdate(BaseModel):
    value: Any = None


class HeroSettingsBase(BaseModel):
    headline: str = Field(..., min_length=1)
    subheadline: str = ""
    cta_text: str = ""
    background_image: Optional[str] = None
    overlay_opacity: float = Field(0.45, ge=0, le=1)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("background_image", mode="before")
    @classmethod
    def blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)


class HeroSettingsUpdate(HeroSettingsBase):
    pass


class HeroSettings(HeroSettingsBase):
    id: Optional[int] = None


# Media


class MediaItem(BaseModel):
    id: int
    file_name: str
    file_url: str
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    alt_text: Optional[str] = None
    created_at: datetime
    kind: Optional[Literal["image", "audio"]] = None

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def classify(self) -> "MediaItem":
        mime = (self.file_type or "").lower()
        if mime.startswith("image/"):
            self.kind = "image"
        elif mime.startswith("audio/"):
            self.kind = "audio"
        return self


class MediaItemUpdate(BaseModel):
    alt_text: Optional[str] = None

    @field_validator("alt_text", mode="before")
    @classmethod
    def blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)


class UploadResult(BaseModel):
    success: bool = True
    url: str
    id: Optional[int] = None
