"""Site settings and hero administration endpoints."""
from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...cache import revalidate_on_commit
from ..deps import get_db, require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/settings", response_model=List[schemas.SiteSetting])
def list_settings(db: Session = Depends(get_db)) -> List[models.SiteSetting]:
    return list(crud.list_site_settings(db))


@router.put("/settings/{key}", response_model=schemas.ActionResult)
def upsert_setting(
    key: Annotated[str, Path(min_length=1, max_length=120, pattern=r"^[a-z0-9_]+$")],
    payload: schemas.SiteSettingUpdate,
    db: Session = Depends(get_db),
) -> schemas.ActionResult:
    setting = crud.upsert_site_setting(db, key=key, value=payload.value)
    revalidate_on_commit(db, "/", "/admin/settings")
    return schemas.ActionResult(id=setting.id)


@router.get("/hero", response_model=schemas.HeroSettings)
def read_hero(db: Session = Depends(get_db)) -> schemas.HeroSettings:
    return crud.get_hero_settings(db)


@router.put("/hero", response_model=schemas.ActionResult)
def update_hero(
    payload: schemas.HeroSettingsUpdate, db: Session = Depends(get_db)
) -> schemas.ActionResult:
    hero = crud.update_hero_settings(db, payload)
    revalidate_on_commit(db, "/", "/admin/settings")
    return schemas.ActionResult(id=hero.id)
