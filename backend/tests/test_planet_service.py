"""
Space Facts API - Planet Repository Unit Tests
===============================================

What:  Tests for PlanetRepository against a mocked AsyncSession.
How:   No database: the session's get/execute/commit are AsyncMocks.

What we test:
    ✅ Absent rows are reported as None / False, never as exceptions
    ✅ Writes commit; lookups of absent rows never commit
    ✅ PUT semantics are full replacement (omitted description → None)
"""

from unittest.mock import MagicMock

import pytest

from spacefacts.models.planet import Planet
from spacefacts.schemas.planet import PlanetInput
from spacefacts.services.planet_service import PlanetRepository


def make_planet(**overrides) -> Planet:
    fields = {"id": 1, "name": "Mars", "description": "Red planet", "photo_filename": None}
    fields.update(overrides)
    return Planet(**fields)


class TestPlanetRepositoryRead:
    """Tests for list_planets and get_planet."""

    @pytest.mark.asyncio
    async def test_list_planets(self, mock_db_session):
        planets = [make_planet(id=1), make_planet(id=2, name="Venus")]
        result = MagicMock()
        result.scalars.return_value.all.return_value = planets
        mock_db_session.execute.return_value = result

        listed = await PlanetRepository(mock_db_session).list_planets()

        assert [p.id for p in listed] == [1, 2]
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_planets_empty(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        assert await PlanetRepository(mock_db_session).list_planets() == []

    @pytest.mark.asyncio
    async def test_get_planet_found(self, mock_db_session):
        planet = make_planet()
        mock_db_session.get.return_value = planet

        assert await PlanetRepository(mock_db_session).get_planet(1) is planet
        mock_db_session.get.assert_awaited_once_with(Planet, 1)

    @pytest.mark.asyncio
    async def test_get_planet_absent(self, mock_db_session):
        assert await PlanetRepository(mock_db_session).get_planet(999) is None


class TestPlanetRepositoryWrite:
    """Tests for create, update, delete and photo assignment."""

    @pytest.mark.asyncio
    async def test_create_planet(self, mock_db_session):
        repository = PlanetRepository(mock_db_session)

        planet = await repository.create_planet(PlanetInput(name="Mars"))

        assert planet.name == "Mars"
        assert planet.description is None
        assert planet.photo_filename is None
        mock_db_session.add.assert_called_once_with(planet)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_planet_replaces_fields(self, mock_db_session):
        planet = make_planet(description="Red planet")
        mock_db_session.get.return_value = planet

        updated = await PlanetRepository(mock_db_session).update_planet(
            1, PlanetInput(name="Mars II")
        )

        assert updated is planet
        assert planet.name == "Mars II"
        assert planet.description is None
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_planet_absent_does_not_insert(self, mock_db_session):
        result = await PlanetRepository(mock_db_session).update_planet(
            42, PlanetInput(name="Ghost")
        )

        assert result is None
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_planet(self, mock_db_session):
        planet = make_planet()
        mock_db_session.get.return_value = planet

        assert await PlanetRepository(mock_db_session).delete_planet(1) is True
        mock_db_session.delete.assert_awaited_once_with(planet)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_planet_absent(self, mock_db_session):
        assert await PlanetRepository(mock_db_session).delete_planet(7) is False
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_photo_filename(self, mock_db_session):
        planet = make_planet(description="Red planet")
        mock_db_session.get.return_value = planet

        updated = await PlanetRepository(mock_db_session).set_photo_filename(1, "abc.png")

        assert updated.photo_filename == "abc.png"
        assert updated.description == "Red planet"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_set_photo_filename_absent(self, mock_db_session):
        assert await PlanetRepository(mock_db_session).set_photo_filename(5, "abc.png") is None
        mock_db_session.commit.assert_not_awaited()
