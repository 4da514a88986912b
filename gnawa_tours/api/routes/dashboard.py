"""Admin dashboard analytics."""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import crud, schemas
from ..deps import get_db, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/dashboard", tags=["admin"], dependencies=[Depends(require_admin)])

DEFAULT_RANGE_DAYS = 30


@router.get("", response_model=schemas.DashboardOverview)
def dashboard_overview(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
) -> schemas.DashboardOverview:
    end = end or date.today()
    start = start or end - timedelta(days=DEFAULT_RANGE_DAYS - 1)
    logger.info("Computing dashboard metrics for %s..%s", start, end)
    return crud.dashboard_overview(db, start, end)
