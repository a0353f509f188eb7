"""REST routes for the visited-countries collection.

========  ==========================  =======================================
Method    Path                        Purpose
========  ==========================  =======================================
GET       ``/api/countries``          All entries, newest first
GET       ``/api/countries/{id}``     Single entry
POST      ``/api/countries``          Create an entry from name + image
PUT       ``/api/countries/{id}``     Rename and/or replace the image
DELETE    ``/api/countries/{id}``     Delete the entry and its image file
========  ==========================  =======================================

Row and file are written independently.  The handlers order the steps so
that a rejected request never leaves a row behind, and clean up the image
they just saved when the row write fails.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from countrydex.api.models import (
    CountryEntry,
    CountryList,
    CreatedCountry,
    ErrorResponse,
    MessageResponse,
)
from countrydex.core.config import CountrydexConfig
from countrydex.core.errors import EntryNotFoundError, MissingFieldsError, StoreError
from countrydex.core.records_db import RecordsDB
from countrydex.core.uploads import read_upload, remove_upload, save_upload, validate_upload

logger = logging.getLogger(__name__)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def get_store(request: Request) -> RecordsDB:
    """Return the records database created during application startup."""
    return request.app.state.records_db


def get_config(request: Request) -> CountrydexConfig:
    """Return the configuration the application was built with."""
    return request.app.state.config


def _has_file(image: UploadFile | None) -> bool:
    # Browsers submit an empty, unnamed part when no file was chosen.
    return image is not None and bool(image.filename)


@router.get("", response_model=CountryList)
async def list_countries(store: RecordsDB = Depends(get_store)) -> CountryList:
    """Return every entry, newest first."""
    return CountryList(countries=[CountryEntry(**row) for row in store.list_entries()])


@router.get("/{entry_id}", response_model=CountryEntry)
async def get_country(entry_id: int, store: RecordsDB = Depends(get_store)) -> CountryEntry:
    """Return a single entry.

    Raises:
        EntryNotFoundError: 404 if the id does not exist.
    """
    row = store.get(entry_id)
    if row is None:
        raise EntryNotFoundError("Country not found")
    return CountryEntry(**row)


@router.post("", response_model=CreatedCountry)
async def create_country(
    name: str | None = Form(None),
    image: UploadFile | None = File(None),
    store: RecordsDB = Depends(get_store),
    cfg: CountrydexConfig = Depends(get_config),
) -> CreatedCountry:
    """Create an entry from a multipart ``name`` + ``image`` submission.

    Steps:

    1. Require both fields (400) before anything is written.
    2. Validate the image type (400) and size (413).
    3. Save the image under a generated name.
    4. Insert the row; if that fails, remove the saved image again.

    Returns:
        The new entry's ``id``, ``name`` and ``image_path``.
    """
    name = (name or "").strip()
    if not name or not _has_file(image):
        raise MissingFieldsError("Country name and image are required")

    validate_upload(image.filename, image.content_type, cfg)
    data = await read_upload(image, cfg)
    filename = save_upload(data, image.filename, cfg.uploads_dir)

    try:
        row = store.insert(name, filename)
    except StoreError:
        remove_upload(filename, cfg.uploads_dir)
        raise

    return CreatedCountry(id=row["id"], name=row["name"], image_path=row["image_path"])


@router.put("/{entry_id}", response_model=MessageResponse)
async def update_country(
    entry_id: int,
    name: str | None = Form(None),
    image: UploadFile | None = File(None),
    store: RecordsDB = Depends(get_store),
    cfg: CountrydexConfig = Depends(get_config),
) -> MessageResponse:
    """Rename an entry and/or replace its image.

    With a new image the previous file is removed after the row points at the
    replacement.  Without one only the name changes and the image is kept.

    Raises:
        MissingFieldsError: 400 if neither field was supplied.
        EntryNotFoundError: 404 if the id does not exist.
    """
    new_name = (name or "").strip() or None
    has_image = _has_file(image)
    if new_name is None and not has_image:
        raise MissingFieldsError("Country name or image is required")

    data = None
    if has_image:
        validate_upload(image.filename, image.content_type, cfg)
        data = await read_upload(image, cfg)

    existing = store.get(entry_id)
    if existing is None:
        raise EntryNotFoundError("Country not found")

    if data is None:
        if not store.update_name(entry_id, new_name):
            raise EntryNotFoundError("Country not found")
        return MessageResponse(message="Country updated successfully")

    filename = save_upload(data, image.filename, cfg.uploads_dir)
    try:
        updated = store.update_image(entry_id, filename, name=new_name)
    except StoreError:
        remove_upload(filename, cfg.uploads_dir)
        raise

    if not updated:
        # Deleted by a concurrent request between the lookup and the update.
        remove_upload(filename, cfg.uploads_dir)
        raise EntryNotFoundError("Country not found")

    remove_upload(existing["image_path"], cfg.uploads_dir)
    return MessageResponse(message="Country updated successfully")


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_country(
    entry_id: int,
    store: RecordsDB = Depends(get_store),
    cfg: CountrydexConfig = Depends(get_config),
) -> MessageResponse:
    """Delete an entry together with its image file.

    Deleting an id that does not exist is not an error; the same confirmation
    is returned so repeated deletes are harmless.
    """
    existing = store.get(entry_id)
    if existing is None:
        logger.debug(f"Delete of unknown country {entry_id} treated as success")
        return MessageResponse(message="Country deleted successfully")

    remove_upload(existing["image_path"], cfg.uploads_dir)
    store.delete(entry_id)
    return MessageResponse(message="Country deleted successfully")
