"""Program catalogue administration endpoints."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...cache import revalidate_on_commit
from ...exceptions import NotFoundError
from ..deps import get_db, require_admin

router = APIRouter(prefix="/admin/programs", tags=["admin"], dependencies=[Depends(require_admin)])


def _get_program_or_404(db: Session, program_id: int) -> models.Program:
    program = crud.get_program(db, program_id)
    if not program:
        raise NotFoundError("Program not found")
    return program


@router.get("", response_model=List[schemas.Program])
def list_programs(db: Session = Depends(get_db)) -> List[models.Program]:
    return list(crud.list_programs(db))


@router.get("/{program_id}", response_model=schemas.Program)
def get_program(program_id: int, db: Session = Depends(get_db)) -> models.Program:
    return _get_program_or_404(db, program_id)


@router.post("", response_model=schemas.ActionResult)
def create_program(
    program_in: schemas.ProgramCreate, db: Session = Depends(get_db)
) -> schemas.ActionResult:
    program = crud.create_program(db, program_in)
    revalidate_on_commit(db, "/", "/admin/programs")
    return schemas.ActionResult(id=program.id)


@router.put("/{program_id}", response_model=schemas.ActionResult)
def update_program(
    program_id: int,
    program_in: schemas.ProgramCreate,
    db: Session = Depends(get_db),
) -> schemas.ActionResult:
    program = crud.update_program(db, _get_program_or_404(db, program_id), program_in)
    revalidate_on_commit(db, "/", "/admin/programs")
    return schemas.ActionResult(id=program.id)


@router.patch("/{program_id}/publish", response_model=schemas.ActionResult)
def toggle_program_publish(
    program_id: int,
    payload: schemas.PublishToggle,
    db: Session = Depends(get_db),
) -> schemas.ActionResult:
    program = crud.set_program_published(
        db, _get_program_or_404(db, program_id), payload.is_published
    )
    revalidate_on_commit(db, "/", "/admin/programs")
    return schemas.ActionResult(id=program.id)


@router.delete("/{program_id}", response_model=schemas.ActionResult)
def delete_program(program_id: int, db: Session = Depends(get_db)) -> schemas.ActionResult:
    crud.delete_program(db, _get_program_or_404(db, program_id))
    revalidate_on_commit(db, "/", "/admin/programs")
    return schemas.ActionResult(id=program_id)
