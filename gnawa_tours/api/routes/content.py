"""Public read-only content feed."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...rendering import resolve_section
from ..deps import get_optional_db

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/content", summary="Hero, published programs and visible sections")
def read_content(db: Optional[Session] = Depends(get_optional_db)) -> dict[str, Any]:
    content = crud.get_public_content(db)
    return {
        "hero": content["hero"].model_dump(mode="json"),
        "programs": [
            schemas.PublicProgram.model_validate(program).model_dump(mode="json")
            for program in content["programs"]
        ],
        "sections": [
            resolve_section(section).model_dump(mode="json") for section in content["sections"]
        ],
        "site": content["site"].model_dump(mode="json"),
    }
