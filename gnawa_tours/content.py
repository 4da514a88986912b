"""Dynamic section content model.

A dynamic section stores an opaque JSON ``content`` payload whose shape is
selected by ``layout_type``. The write path only shapes it on a best-effort
basis, so everything read back from storage goes through
:func:`resolve_section_content`, which turns any JSON value into exactly one
typed variant:

==================  =======================
layout_type         variant
==================  =======================
``centered``        :class:`CenteredContent`
``grid``            :class:`GridContent`
``full-bleed``      :class:`GalleryContent`
``text-left/right`` :class:`TestimonialsContent` when ``quotes`` is a
                    non-empty list, otherwise :class:`TextImageContent`
==================  =======================

Resolution never raises. Wrong types and missing keys collapse to empty
defaults, unknown card icons fall back to ``compass`` and ratings are clamped
to the 1-5 range.
"""
from __future__ import annotations

import math
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

from .constants import CARD_ICONS, DEFAULT_CARD_ICON, MAX_RATING, MIN_RATING

TextDirection = Literal["text-left", "text-right"]


class CenteredContent(BaseModel):
    kind: Literal["centered"] = "centered"
    text: str = ""
    image: Optional[str] = None


class GridCard(BaseModel):
    icon: str = DEFAULT_CARD_ICON
    title: str = ""
    description: str = ""


class GridContent(BaseModel):
    kind: Literal["grid"] = "grid"
    cards: List[GridCard] = Field(default_factory=list)


class GallerySlide(BaseModel):
    image: str
    caption: str = ""


class GalleryContent(BaseModel):
    kind: Literal["gallery"] = "gallery"
    text: str = ""
    slides: List[GallerySlide] = Field(default_factory=list)

    @property
    def images(self) -> List[str]:
        return [slide.image for slide in self.slides]

    @property
    def fallback_caption(self) -> str:
        """First sentence of the section text, shown for slides without a caption."""
        for sentence in self.text.split("."):
            if sentence.strip():
                return sentence.strip()
        return ""


class TextImageContent(BaseModel):
    kind: Literal["text-image"] = "text-image"
    direction: TextDirection = "text-left"
    text: str = ""
    image: Optional[str] = None


class Quote(BaseModel):
    name: str = ""
    location: str = ""
    text: str
    rating: int = Field(MAX_RATING, ge=MIN_RATING, le=MAX_RATING)


class TestimonialsContent(BaseModel):
    kind: Literal["testimonials"] = "testimonials"
    direction: TextDirection = "text-left"
    quotes: List[Quote] = Field(default_factory=list)


SectionContent = Annotated[
    Union[CenteredContent, GridContent, GalleryContent, TextImageContent, TestimonialsContent],
    Field(discriminator="kind"),
]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _optional_url(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def clamp_rating(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MAX_RATING
    if isinstance(value, float) and not math.isfinite(value):
        return MAX_RATING
    return max(MIN_RATING, min(MAX_RATING, int(round(value))))


def coerce_icon(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in CARD_ICONS:
        return value.strip().lower()
    return DEFAULT_CARD_ICON


def parse_centered(content: Mapping[str, Any]) -> CenteredContent:
    return CenteredContent(text=_text(content.get("text")), image=_optional_url(content.get("image")))


def parse_grid(content: Mapping[str, Any]) -> GridContent:
    cards = [
        GridCard(
            icon=coerce_icon(card.get("icon")),
            title=_text(card.get("title")),
            description=_text(card.get("description")),
        )
        for card in _list(content.get("cards"))
        if isinstance(card, dict)
    ]
    return GridContent(cards=cards)


def parse_gallery(content: Mapping[str, Any]) -> GalleryContent:
    captions = _list(content.get("captions"))
    slides: List[GallerySlide] = []
    # Captions pair with the raw image index, so a dropped image takes its caption along.
    for index, raw in enumerate(_list(content.get("images"))):
        image = _optional_url(raw)
        if image is None:
            continue
        caption = captions[index] if index < len(captions) else ""
        slides.append(GallerySlide(image=image, caption=_text(caption).strip()))
    return GalleryContent(text=_text(content.get("text")), slides=slides)


def parse_testimonials(content: Mapping[str, Any], direction: TextDirection) -> TestimonialsContent:
    quotes = [
        Quote(
            name=_text(quote.get("name")),
            location=_text(quote.get("location")),
            text=_text(quote.get("text")).strip(),
            rating=clamp_rating(quote.get("rating")),
        )
        for quote in _list(content.get("quotes"))
        if isinstance(quote, dict) and _text(quote.get("text")).strip()
    ]
    return TestimonialsContent(direction=direction, quotes=quotes)


def parse_text_image(content: Mapping[str, Any], direction: TextDirection) -> TextImageContent:
    return TextImageContent(
        direction=direction,
        text=_text(content.get("text")),
        image=_optional_url(content.get("image")),
    )


def is_testimonial_mode(content: Any) -> bool:
    """True when a text-left/right payload carries a non-empty ``quotes`` list."""
    return isinstance(content, dict) and bool(_list(content.get("quotes")))


def resolve_section_content(layout_type: Any, content: Any) -> SectionContent:
    """Resolve a stored section payload into its typed variant."""

    payload: Mapping[str, Any] = content if isinstance(content, dict) else {}

    if layout_type == "grid":
        return parse_grid(payload)
    if layout_type == "full-bleed":
        return parse_gallery(payload)
    if layout_type in ("text-left", "text-right"):
        if is_testimonial_mode(payload):
            return parse_testimonials(payload, layout_type)
        return parse_text_image(payload, layout_type)
    # "centered" and any unrecognized layout.
    return parse_centered(payload)
