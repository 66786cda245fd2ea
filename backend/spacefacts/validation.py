"""
Space Facts API - Request Body Validation
==========================================

What:  Explicit validation functions, one per input shape, returning a tagged
       result instead of raising.
How:   `validate_planet_input(body)` runs the PlanetInput schema and returns
       either Valid(value) or Invalid(errors). The FastAPI dependency
       `planet_input` reads the raw JSON body, calls the validator, and turns
       an Invalid result into ValidationFailedError so the terminal error
       handler builds the 400 response.

Flow:
    request body ──json──▶ validate_planet_input ──▶ Valid ──▶ handler
                      │                          └─▶ Invalid ──▶ ValidationFailedError
                      └─▶ not JSON ──▶ BadRequestError
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from spacefacts.exceptions import BadRequestError, ValidationFailedError
from spacefacts.schemas.planet import PlanetInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Valid:
    value: PlanetInput


@dataclass(frozen=True)
class Invalid:
    errors: List[FieldError] = field(default_factory=list)


ValidationResult = Union[Valid, Invalid]


def _field_errors(exc: PydanticValidationError) -> List[FieldError]:
    """Flatten pydantic's error list into (field, message) pairs."""
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "body"
        errors.append(FieldError(field=location, message=err.get("msg", "Invalid value")))
    return errors


def validate_planet_input(body: Any) -> ValidationResult:
    """
    Validate a decoded JSON body against the planet input schema.

    Rules:
        - body must be a JSON object
        - name: required non-empty string (numbers are not coerced to text)
        - description: optional string or null
        - any other key is stripped from the value

    Returns:
        Valid(PlanetInput) on success, Invalid([FieldError, ...]) otherwise.
    """
    if not isinstance(body, dict):
        return Invalid([FieldError(field="body", message="Request body must be a JSON object")])

    try:
        value = PlanetInput.model_validate(body)
    except PydanticValidationError as exc:
        return Invalid(_field_errors(exc))

    return Valid(value)


async def planet_input(request: Request) -> PlanetInput:
    """
    FastAPI dependency producing a validated PlanetInput.

    Runs before the handler body, so a failing request never reaches the
    repository.

    Raises:
        BadRequestError: body is not valid JSON
        ValidationFailedError: body is JSON but does not match the schema
    """
    try:
        body = await request.json()
    except ValueError:
        raise BadRequestError(message="Request body must be valid JSON")

    result = validate_planet_input(body)
    if isinstance(result, Invalid):
        logger.debug("Rejected planet input: %s", result.errors)
        raise ValidationFailedError(errors=[e.as_dict() for e in result.errors])

    return result.value
