"""Booking pipeline and revenue aggregation for the admin dashboard.

Everything here is a pure function of its arguments: bookings and program
prices go in, a :class:`~gnawa_tours.schemas.BookingMetrics` comes out.
"""
from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from . import schemas
from .constants import BOOKING_STATUSES, DZD_COUNTRY

DAILY_MAX_DAYS = 60
WEEKLY_MAX_DAYS = 180


def _get(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def _price(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def uses_dzd(origin_country: Any) -> bool:
    return isinstance(origin_country, str) and origin_country.strip().upper() == DZD_COUNTRY


def booking_value(booking: Any, prices: Mapping[Any, Any]) -> Tuple[float, float]:
    """Return the (eur, dzd) value of a booking; only one side is non-zero."""

    program_id = _get(booking, "program_id")
    program = prices.get(program_id) if program_id is not None else None
    group_size = _get(booking, "group_size") or 0
    if uses_dzd(_get(booking, "origin_country")):
        return 0.0, _price(_get(program, "price_dzd")) * group_size
    return _price(_get(program, "price_eur")) * group_size, 0.0


def choose_granularity(start: date, end: date) -> str:
    span_days = (end - start).days + 1
    if span_days <= DAILY_MAX_DAYS:
        return "day"
    if span_days <= WEEKLY_MAX_DAYS:
        return "week"
    return "month"


def build_buckets(start: date, end: date, granularity: str) -> List[schemas.SeriesBucket]:
    buckets: List[schemas.SeriesBucket] = []
    cursor = start
    while cursor <= end:
        if granularity == "day":
            bucket_end = cursor
            label = cursor.isoformat()
        elif granularity == "week":
            bucket_end = min(cursor + timedelta(days=6), end)
            label = cursor.isoformat()
        else:
            last_day = monthrange(cursor.year, cursor.month)[1]
            bucket_end = min(cursor.replace(day=last_day), end)
            label = cursor.strftime("%Y-%m")
        buckets.append(schemas.SeriesBucket(label=label, start=cursor, end=bucket_end))
        cursor = bucket_end + timedelta(days=1)
    return buckets


def _bucket_index(buckets: List[schemas.SeriesBucket], day: date) -> Optional[int]:
    for index, bucket in enumerate(buckets):
        if bucket.start <= day <= bucket.end:
            return index
    return None


def compute_booking_metrics(
    bookings: Iterable[Any],
    prices: Mapping[Any, Any],
    start: date,
    end: date,
) -> schemas.BookingMetrics:
    """Aggregate pipeline value, conversion and a time series over ``bookings``.

    ``prices`` maps a program id to anything exposing ``price_eur`` and
    ``price_dzd``. Totals cover every booking passed in; the series only
    counts bookings created within ``[start, end]``.
    """

    if end < start:
        start, end = end, start

    granularity = choose_granularity(start, end)
    buckets = build_buckets(start, end, granularity)
    status_counts = {status: 0 for status in BOOKING_STATUSES}
    total = 0
    group_total = 0
    pipeline_eur = pipeline_dzd = 0.0
    confirmed_eur = confirmed_dzd = 0.0

    for booking in bookings:
        status = _get(booking, "status") or "new"
        value_eur, value_dzd = booking_value(booking, prices)
        total += 1
        group_total += _get(booking, "group_size") or 0
        status_counts[status] = status_counts.get(status, 0) + 1

        if status != "cancelled":
            pipeline_eur += value_eur
            pipeline_dzd += value_dzd
        if status == "confirmed":
            confirmed_eur += value_eur
            confirmed_dzd += value_dzd

        created = _as_date(_get(booking, "created_at"))
        if created is None or not start <= created <= end:
            continue
        index = _bucket_index(buckets, created)
        if index is None:
            continue
        bucket = buckets[index]
        bucket.count += 1
        if status == "confirmed":
            bucket.revenue_eur += value_eur
            bucket.revenue_dzd += value_dzd

    return schemas.BookingMetrics(
        total_bookings=total,
        status_counts=status_counts,
        pipeline_value_eur=pipeline_eur,
        pipeline_value_dzd=pipeline_dzd,
        confirmed_value_eur=confirmed_eur,
        confirmed_value_dzd=confirmed_dzd,
        average_group_size=group_total / total if total else 0,
        conversion_rate=status_counts["confirmed"] / total * 100 if total else 0,
        granularity=granularity,
        series=buckets,
    )


def count_created_since(bookings: Iterable[Any], since: datetime) -> int:
    count = 0
    for booking in bookings:
        created = _get(booking, "created_at")
        if isinstance(created, datetime) and created >= since:
            count += 1
    return count
