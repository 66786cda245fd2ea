"""
Space Facts API - Planet Input Validation Tests
================================================

What:  Tests for validate_planet_input and its tagged Valid / Invalid result.
"""

import pytest

from spacefacts.validation import FieldError, Invalid, Valid, validate_planet_input


class TestValidPlanetInput:

    def test_name_only(self):
        result = validate_planet_input({"name": "Mars"})
        assert isinstance(result, Valid)
        assert result.value.name == "Mars"
        assert result.value.description is None

    def test_name_and_description(self):
        result = validate_planet_input({"name": "Mars", "description": "Red planet"})
        assert isinstance(result, Valid)
        assert result.value.description == "Red planet"

    def test_null_description(self):
        result = validate_planet_input({"name": "Mars", "description": None})
        assert isinstance(result, Valid)
        assert result.value.description is None

    def test_extra_fields_stripped(self):
        result = validate_planet_input({"name": "Mars", "moons": 2, "id": 99})
        assert isinstance(result, Valid)
        assert result.value.model_dump() == {"name": "Mars", "description": None}


class TestInvalidPlanetInput:

    def test_missing_name(self):
        result = validate_planet_input({"description": "No name"})
        assert isinstance(result, Invalid)
        assert [e.field for e in result.errors] == ["name"]

    def test_empty_name(self):
        result = validate_planet_input({"name": ""})
        assert isinstance(result, Invalid)
        assert result.errors[0].field == "name"

    def test_name_too_long(self):
        result = validate_planet_input({"name": "x" * 129})
        assert isinstance(result, Invalid)

    def test_numeric_name_not_coerced(self):
        result = validate_planet_input({"name": 42})
        assert isinstance(result, Invalid)
        assert result.errors[0].field == "name"

    def test_non_string_description(self):
        result = validate_planet_input({"name": "Mars", "description": ["red"]})
        assert isinstance(result, Invalid)
        assert result.errors[0].field == "description"

    def test_multiple_field_errors(self):
        result = validate_planet_input({"name": 1, "description": 2})
        assert isinstance(result, Invalid)
        assert {e.field for e in result.errors} == {"name", "description"}

    @pytest.mark.parametrize("body", [[], "Mars", 42, None])
    def test_body_must_be_object(self, body):
        result = validate_planet_input(body)
        assert isinstance(result, Invalid)
        assert result.errors == [FieldError(field="body", message="Request body must be a JSON object")]

    def test_field_error_as_dict(self):
        assert FieldError(field="name", message="Field required").as_dict() == {
            "field": "name",
            "message": "Field required",
        }
