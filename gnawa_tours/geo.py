"""Visitor country detection from CDN geolocation headers."""
from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from .constants import ALPHA3_TO_ALPHA2, COUNTRY_HEADER_KEYS, DEFAULT_ORIGIN_COUNTRY, DZD_COUNTRY

_ALPHA2 = re.compile(r"^[A-Z]{2}$")


def _read_header(headers: Mapping[str, Any], key: str) -> Optional[str]:
    value = headers.get(key)
    if value is None:
        value = headers.get(key.lower())
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value if isinstance(value, str) else None


def country_from_headers(headers: Mapping[str, Any]) -> Optional[str]:
    for key in COUNTRY_HEADER_KEYS:
        raw = _read_header(headers, key)
        if not raw:
            continue
        value = raw.strip().upper()
        if not value or value == "XX":
            continue
        if len(value) == 3 and value in ALPHA3_TO_ALPHA2:
            return ALPHA3_TO_ALPHA2[value]
        if _ALPHA2.match(value):
            return value
    return None


def pricing_region(country: Optional[str]) -> str:
    return DZD_COUNTRY if country == DZD_COUNTRY else DEFAULT_ORIGIN_COUNTRY
