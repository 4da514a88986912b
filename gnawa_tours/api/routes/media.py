"""Media upload and library management endpoints."""
from __future__ import annotations

import logging
from typing import Annotated, List, Literal, Optional

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile
from sqlalchemy.orm import Session

from ... import crud, schemas, utils
from ...cache import revalidate_on_commit
from ...constants import UPLOAD_CHUNK_BYTES
from ...exceptions import NotFoundError, UploadRejectedError
from ..deps import get_db, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(tags=["media"], dependencies=[Depends(require_admin)])


async def _read_bounded(file: UploadFile) -> bytes:
    """Read the upload in chunks, stopping as soon as the size ceiling is passed."""

    if file.size is not None:
        utils.check_upload_size(file.size)
    buffer = bytearray()
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            return bytes(buffer)
        buffer.extend(chunk)
        utils.check_upload_size(len(buffer))


@router.post(
    "/api/upload",
    response_model=schemas.UploadResult,
    responses={400: {"model": schemas.ErrorResponse}},
    summary="Upload an image or audio file",
)
async def upload_media(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> schemas.UploadResult:
    try:
        utils.validate_upload_type(file.content_type)
        raw_bytes = await _read_bounded(file)
        content_type = utils.validate_upload(file.content_type, len(raw_bytes))
        stored = utils.store_media_upload(raw_bytes, file.filename or "upload", content_type)
    except UploadRejectedError as exc:
        logger.warning("Rejected upload %s (%s): %s", file.filename, file.content_type, exc.message)
        raise

    try:
        item = crud.create_media_item(
            db,
            file_name=file.filename or str(stored["storage_path"]).split("/")[-1],
            file_url=str(stored["file_url"]),
            file_type=content_type,
            file_size=int(stored["file_size"]),
            storage_path=str(stored["storage_path"]),
            width=stored["width"],
            height=stored["height"],
        )
    except Exception:
        utils.remove_media_file(str(stored["storage_path"]))
        raise
    revalidate_on_commit(db, "/admin/media")
    return schemas.UploadResult(url=item.file_url, id=item.id)


@router.get("/admin/media", response_model=List[schemas.MediaItem])
def list_media_items(
    kind: Optional[Literal["image", "audio"]] = Query(None),
    db: Session = Depends(get_db),
) -> List[schemas.MediaItem]:
    return [schemas.MediaItem.model_validate(item) for item in crud.list_media_items(db, kind=kind)]


@router.patch("/admin/media/{item_id}", response_model=schemas.MediaItem)
def update_media_item(
    item_id: Annotated[int, Path(gt=0)],
    payload: schemas.MediaItemUpdate,
    db: Session = Depends(get_db),
) -> schemas.MediaItem:
    item = crud.get_media_item(db, item_id)
    if not item:
        raise NotFoundError("Media item not found")
    item = crud.update_media_item(db, item, payload)
    revalidate_on_commit(db, "/admin/media")
    return schemas.MediaItem.model_validate(item)


@router.delete("/admin/media/{item_id}", response_model=schemas.ActionResult)
def delete_media_item(
    item_id: Annotated[int, Path(gt=0)], db: Session = Depends(get_db)
) -> schemas.ActionResult:
    item = crud.get_media_item(db, item_id)
    if not item:
        raise NotFoundError("Media item not found")
    crud.delete_media_item(db, item)
    revalidate_on_commit(db, "/", "/admin/media")
    return schemas.ActionResult(id=item_id)
