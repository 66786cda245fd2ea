"""
Space Facts API - Planet Route Handlers
========================================

What:  CRUD endpoints for the planet resource.
How:   Each handler extracts path/body parameters, makes one repository call,
       and shapes the response. The only failure handled here is "record
       absent", which becomes a NotFoundError carrying the request line.

Route Inventory:
    GET    /planets        → list_planets   (200)
    GET    /planets/{id}   → get_planet     (200 | 404)
    POST   /planets        → create_planet  (201 | 400)
    PUT    /planets/{id}   → update_planet  (200 | 400 | 404)
    DELETE /planets/{id}   → delete_planet  (204 | 404)

Id matching:
    `{planet_id:int}` uses Starlette's int convertor ([0-9]+), so
    /planets/mars does not match these routes and falls through to the
    default 404.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from spacefacts.exceptions import NotFoundError
from spacefacts.schemas.planet import ErrorResponse, PlanetInput, PlanetResponse
from spacefacts.services.planet_service import PlanetRepository, get_planet_repository
from spacefacts.validation import planet_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/planets", tags=["Planets"])

# The body is read and validated by the planet_input dependency, so FastAPI
# cannot infer it; document it for the OpenAPI schema explicitly.
_PLANET_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": PlanetInput.model_json_schema()}},
    }
}


@router.get(
    "",
    response_model=List[PlanetResponse],
    summary="List all planets",
)
async def list_planets(
    repository: PlanetRepository = Depends(get_planet_repository),
) -> List[PlanetResponse]:
    planets = await repository.list_planets()
    return [PlanetResponse.model_validate(planet) for planet in planets]


@router.get(
    "/{planet_id:int}",
    response_model=PlanetResponse,
    responses={404: {"description": "Planet not found", "model": ErrorResponse}},
    summary="Get a single planet by id",
)
async def get_planet(
    planet_id: int,
    repository: PlanetRepository = Depends(get_planet_repository),
) -> PlanetResponse:
    planet = await repository.get_planet(planet_id)
    if planet is None:
        raise NotFoundError.for_route("GET", f"/planets/{planet_id}")
    return PlanetResponse.model_validate(planet)


@router.post(
    "",
    status_code=201,
    response_model=PlanetResponse,
    responses={400: {"description": "Invalid planet data", "model": ErrorResponse}},
    summary="Create a planet",
    openapi_extra=_PLANET_BODY_DOC,
)
async def create_planet(
    data: PlanetInput = Depends(planet_input),
    repository: PlanetRepository = Depends(get_planet_repository),
) -> PlanetResponse:
    planet = await repository.create_planet(data)
    return PlanetResponse.model_validate(planet)


@router.put(
    "/{planet_id:int}",
    response_model=PlanetResponse,
    responses={
        400: {"description": "Invalid planet data", "model": ErrorResponse},
        404: {"description": "Planet not found", "model": ErrorResponse},
    },
    summary="Replace a planet's name and description",
    openapi_extra=_PLANET_BODY_DOC,
)
async def update_planet(
    planet_id: int,
    data: PlanetInput = Depends(planet_input),
    repository: PlanetRepository = Depends(get_planet_repository),
) -> PlanetResponse:
    """
    Full-field update. Unknown ids return 404 and nothing is created.
    """
    planet = await repository.update_planet(planet_id, data)
    if planet is None:
        raise NotFoundError.for_route("PUT", f"/planets/{planet_id}")
    return PlanetResponse.model_validate(planet)


@router.delete(
    "/{planet_id:int}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Planet not found", "model": ErrorResponse}},
    summary="Delete a planet",
)
async def delete_planet(
    planet_id: int,
    repository: PlanetRepository = Depends(get_planet_repository),
) -> Response:
    deleted = await repository.delete_planet(planet_id)
    if not deleted:
        raise NotFoundError.for_route("DELETE", f"/planets/{planet_id}")
    return Response(status_code=204)
