"""Typed view over the free-form ``site_settings`` key/value table."""
from __future__ import annotations

import json
from typing import Any, List, Mapping

from pydantic import BaseModel, Field

from .constants import DEFAULT_SITE_SETTINGS

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def to_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return default


def to_string_array(value: Any) -> List[str]:
    """Accept a list, a JSON-encoded list or a comma separated string."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                value = json.loads(stripped)
            except json.JSONDecodeError:
                value = stripped.strip("[]")
        if isinstance(value, str):
            return [piece.strip() for piece in value.split(",") if piece.strip()]
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return []


def to_text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value.strip() or default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


class SiteConfiguration(BaseModel):
    site_name: str = str(DEFAULT_SITE_SETTINGS["site_name"])
    contact_email: str = ""
    contact_phone: str = ""
    address: str = ""
    showcase_images: List[str] = Field(default_factory=list)
    ambient_music_enabled: bool = False
    ambient_music_tracks: List[str] = Field(default_factory=list)


def load_site_configuration(values: Mapping[str, Any]) -> SiteConfiguration:
    """Normalize raw setting values once, at load time."""

    return SiteConfiguration(
        site_name=to_text(values.get("site_name"), str(DEFAULT_SITE_SETTINGS["site_name"])),
        contact_email=to_text(values.get("contact_email")),
        contact_phone=to_text(values.get("contact_phone")),
        address=to_text(values.get("address")),
        showcase_images=to_string_array(values.get("showcase_images")),
        ambient_music_enabled=to_bool(values.get("ambient_music_enabled")),
        ambient_music_tracks=to_string_array(values.get("ambient_music_tracks")),
    )
