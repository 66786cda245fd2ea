"""
Space Facts API - Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the JSON contract of the planets API.
How:   PlanetInput declares the accepted body fields (read by
       spacefacts.validation); the response models control exactly which
       attributes leave the server and under which JSON names.

Wire naming:
    The ORM uses snake_case (photo_filename); clients see camelCase
    (photoFilename). Only serialization is aliased, so the models are still
    constructed with their Python field names.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PlanetInput(BaseModel):
    """
    Body of POST /planets and PUT /planets/{id}.

    Unknown keys are dropped (extra="ignore"); only name and description
    reach the repository.
    """

    name: str = Field(min_length=1, max_length=128, description="Planet name")
    description: Optional[str] = Field(default=None, description="Free-text description")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PlanetResponse(BaseModel):
    """
    What:  Full representation of a planet record.
    Who:   Returned by every planet endpoint except DELETE and the photo upload.
    """

    id: int = Field(description="Server-generated identifier")
    name: str
    description: Optional[str] = None
    photo_filename: Optional[str] = Field(
        default=None,
        serialization_alias="photoFilename",
        description="Filename of the uploaded photo, null until one is uploaded",
    )

    model_config = {"from_attributes": True}


class PhotoUploadResponse(BaseModel):
    """Returned by POST /planets/{id}/photo with HTTP 201."""

    photo_filename: str = Field(serialization_alias="photoFilename")


# ══════════════════════════════════════════════════════════════════════════
# Error / Service Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Uniform error body.

    Example:
        {"error": "Cannot GET /planets/999"}

    `details` is only present on validation failures.
    """

    error: str = Field(description="Human-readable error message")
    details: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Field-level errors (validation failures only)"
    )


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
