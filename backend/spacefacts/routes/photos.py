"""
Space Facts API - Planet Photo Routes
======================================

What:  Upload a photo for a planet and serve stored photos back.
How:   The multipart body is parsed by Starlette (python-multipart); the
       "photo" part goes to PhotoStorage, then the generated filename is
       recorded on the planet through the repository.

Request Flow (POST /planets/{id}/photo):
    1. No "photo" file part          → 400 "No photo file uploaded"
       (absent, a plain text field, or a file part without a filename)
    2. Wrong type / too large        → 400 (PhotoStorage)
    3. File written to UPLOAD_DIR
    4. Planet missing                → file removed, 404
    5. photo_filename saved          → 201 {"photoFilename": ...}
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse
from starlette.datastructures import UploadFile

from spacefacts.exceptions import BadRequestError, NotFoundError
from spacefacts.schemas.planet import ErrorResponse, PhotoUploadResponse
from spacefacts.services.photo_storage import PhotoStorage, get_photo_storage
from spacefacts.services.planet_service import PlanetRepository, get_planet_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/planets", tags=["Photos"])

# The form is read inside the handler so that a text field named "photo"
# gets the same 400 as a missing file; document the body by hand.
_PHOTO_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "photo": {
                            "type": "string",
                            "format": "binary",
                            "description": "PNG or JPEG image, max 6MB",
                        }
                    },
                    "required": ["photo"],
                }
            }
        },
    }
}


@router.post(
    "/{planet_id:int}/photo",
    status_code=201,
    response_model=PhotoUploadResponse,
    responses={
        400: {"description": "Missing or invalid photo", "model": ErrorResponse},
        404: {"description": "Planet not found", "model": ErrorResponse},
    },
    summary="Upload a photo for a planet",
    openapi_extra=_PHOTO_BODY_DOC,
)
async def upload_planet_photo(
    planet_id: int,
    request: Request,
    repository: PlanetRepository = Depends(get_planet_repository),
    storage: PhotoStorage = Depends(get_photo_storage),
) -> PhotoUploadResponse:
    form = await request.form()
    photo = form.get("photo")
    if not isinstance(photo, UploadFile) or not photo.filename:
        raise BadRequestError(message="No photo file uploaded")

    try:
        content = await photo.read()
        logger.info(
            "Received photo for planet %s: filename=%s, size=%d bytes",
            planet_id,
            photo.filename,
            len(content),
        )
        photo_filename = await storage.store_photo(content, photo.content_type)
    finally:
        await form.close()

    planet = await repository.set_photo_filename(planet_id, photo_filename)
    if planet is None:
        await storage.cleanup_photo(photo_filename)
        raise NotFoundError.for_route("POST", f"/planets/{planet_id}/photo")

    return PhotoUploadResponse(photo_filename=photo_filename)


@router.get(
    "/photos/{filename}",
    response_class=FileResponse,
    responses={
        200: {"description": "Photo file"},
        404: {"description": "Photo not found", "model": ErrorResponse},
    },
    summary="Serve an uploaded planet photo",
)
async def serve_planet_photo(
    filename: str,
    storage: PhotoStorage = Depends(get_photo_storage),
) -> FileResponse:
    path = storage.resolve_photo(filename)
    if path is None:
        raise NotFoundError.for_route("GET", f"/planets/photos/{filename}")
    return FileResponse(path=str(path))
