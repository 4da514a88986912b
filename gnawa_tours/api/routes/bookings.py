"""Booking intake and booking administration endpoints."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...cache import revalidate_on_commit
from ...exceptions import NotFoundError
from ..deps import get_db, get_optional_db, require_admin

router = APIRouter(prefix="/api/bookings", tags=["bookings"])
admin_router = APIRouter(
    prefix="/admin/bookings", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.post(
    "",
    response_model=schemas.ActionResult,
    response_model_exclude_none=True,
    responses={400: {"model": schemas.ErrorResponse}, 503: {"model": schemas.ErrorResponse}},
    summary="Submit a booking request",
)
def submit_booking(
    booking_in: schemas.BookingCreate, db: Optional[Session] = Depends(get_optional_db)
) -> schemas.ActionResult:
    crud.submit_booking(db, booking_in)
    return schemas.ActionResult()


@admin_router.get("", response_model=List[schemas.BookingListItem])
def list_bookings(
    status_filter: Optional[schemas.BookingStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=200),
    db: Session = Depends(get_db),
) -> List[schemas.BookingListItem]:
    return crud.list_bookings(db, status=status_filter, search=(search or "").strip() or None)


@admin_router.patch("/{booking_id}/status", response_model=schemas.ActionResult)
def update_booking_status(
    booking_id: int,
    payload: schemas.BookingStatusUpdate,
    db: Session = Depends(get_db),
) -> schemas.ActionResult:
    booking = crud.get_booking(db, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    crud.update_booking_status(db, booking, payload.status)
    revalidate_on_commit(db, "/", "/admin/bookings")
    return schemas.ActionResult(id=booking.id)
