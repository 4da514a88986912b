"""Dynamic section administration endpoints."""
from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...cache import revalidate_on_commit
from ...exceptions import NotFoundError
from ...rendering import render_section, resolve_section
from ..deps import get_db, require_admin

router = APIRouter(prefix="/admin/sections", tags=["admin"], dependencies=[Depends(require_admin)])


def _get_section_or_404(db: Session, section_id: int) -> models.DynamicSection:
    section = crud.get_section(db, section_id)
    if not section:
        raise NotFoundError("Section not found")
    return section


@router.get("", response_model=List[schemas.Section])
def list_sections(db: Session = Depends(get_db)) -> List[models.DynamicSection]:
    return list(crud.list_sections(db))


@router.post("", response_model=schemas.ActionResult)
def create_section(
    section_in: schemas.SectionCreate, db: Session = Depends(get_db)
) -> schemas.ActionResult:
    section = crud.create_section(db, section_in)
    revalidate_on_commit(db, "/", "/admin/sections")
    return schemas.ActionResult(id=section.id)


@router.put("/{section_id}", response_model=schemas.ActionResult)
def update_section(
    section_id: int,
    section_in: schemas.SectionCreate,
    db: Session = Depends(get_db),
) -> schemas.ActionResult:
    section = crud.update_section(db, _get_section_or_404(db, section_id), section_in)
    revalidate_on_commit(db, "/", "/admin/sections")
    return schemas.ActionResult(id=section.id)


@router.patch("/{section_id}/visibility", response_model=schemas.ActionResult)
def toggle_section_visibility(
    section_id: int,
    payload: schemas.VisibilityToggle,
    db: Session = Depends(get_db),
) -> schemas.ActionResult:
    section = crud.set_section_visibility(
        db, _get_section_or_404(db, section_id), payload.is_visible
    )
    revalidate_on_commit(db, "/", "/admin/sections")
    return schemas.ActionResult(id=section.id)


@router.delete("/{section_id}", response_model=schemas.ActionResult)
def delete_section(section_id: int, db: Session = Depends(get_db)) -> schemas.ActionResult:
    crud.delete_section(db, _get_section_or_404(db, section_id))
    revalidate_on_commit(db, "/", "/admin/sections")
    return schemas.ActionResult(id=section_id)


@router.get("/{section_id}/preview", summary="Resolved content and rendered markup")
def preview_section(section_id: int, db: Session = Depends(get_db)) -> dict[str, Any]:
    resolved = resolve_section(_get_section_or_404(db, section_id))
    return {
        "section": resolved.model_dump(mode="json"),
        "html": render_section(resolved),
    }
