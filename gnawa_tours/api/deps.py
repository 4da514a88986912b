"""Shared FastAPI dependencies."""
from __future__ import annotations

import logging
import secrets
from typing import Annotated, Generator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import database
from ..config import settings
from ..exceptions import BackendError, BackendUnavailableError

logger = logging.getLogger(__name__)


def get_optional_db() -> Generator[Optional[Session], None, None]:
    """Provide a scoped session, or ``None`` when no backend is configured."""
    if database.SessionLocal is None:
        yield None
        return
    db = database.SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Backend rejected operation: %s", exc)
        raise BackendError(str(getattr(exc, "orig", None) or exc)) from exc
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db(db: Optional[Session] = Depends(get_optional_db)) -> Session:
    """Require a configured backend; admin actions cannot run without one."""
    if db is None:
        raise BackendUnavailableError()
    return db


def require_admin(
    admin_key: Annotated[str | None, Header(alias="X-Admin-Key")] = None,
) -> None:
    """Check the shared admin key when one is configured."""

    expected = settings.admin_api_key
    if not expected:
        return
    if not admin_key or not secrets.compare_digest(admin_key, expected):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
