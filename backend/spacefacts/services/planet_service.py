"""
Space Facts API - Planet Repository
====================================

What:  The data-access operations behind every planet endpoint.
How:   Wraps the request's AsyncSession. Each method issues one logical
       data-store operation and commits its own writes.
Who:   Built per request by the `get_planet_repository` dependency.

Not-found contract:
    A missing row is reported by return value (None / False), never by
    exception. The route decides the 404 message. Any SQLAlchemy failure
    propagates and is turned into DatabaseError by Database.session().
"""

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spacefacts.database import get_db_session
from spacefacts.models.planet import Planet
from spacefacts.schemas.planet import PlanetInput

logger = logging.getLogger(__name__)


class PlanetRepository:
    """
    CRUD over the planets table.

    Responsibilities:
        - list_planets(): all rows in insertion (id) order
        - get_planet(): one row or None
        - create_planet(): insert, returns the row with its generated id
        - update_planet(): full replacement of name/description, None if absent
        - delete_planet(): True if a row was removed
        - set_photo_filename(): None if absent
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_planets(self) -> List[Planet]:
        result = await self.session.execute(select(Planet).order_by(Planet.id))
        return list(result.scalars().all())

    async def get_planet(self, planet_id: int) -> Optional[Planet]:
        return await self.session.get(Planet, planet_id)

    async def create_planet(self, data: PlanetInput) -> Planet:
        """
        Insert a new planet.

        The id is assigned by the database during flush; photo_filename
        always starts as null.
        """
        planet = Planet(name=data.name, description=data.description)
        self.session.add(planet)
        await self.session.flush()
        await self.session.commit()
        logger.info("Planet created: id=%s name=%s", planet.id, planet.name)
        return planet

    async def update_planet(self, planet_id: int, data: PlanetInput) -> Optional[Planet]:
        """
        Replace name and description of an existing planet.

        A description omitted from the body becomes null. Never inserts:
        an unknown id returns None and leaves the table untouched.
        """
        planet = await self.get_planet(planet_id)
        if planet is None:
            return None

        planet.name = data.name
        planet.description = data.description
        await self.session.flush()
        await self.session.commit()
        logger.info("Planet updated: id=%s", planet_id)
        return planet

    async def delete_planet(self, planet_id: int) -> bool:
        planet = await self.get_planet(planet_id)
        if planet is None:
            return False

        await self.session.delete(planet)
        await self.session.commit()
        logger.info("Planet deleted: id=%s", planet_id)
        return True

    async def set_photo_filename(self, planet_id: int, photo_filename: str) -> Optional[Planet]:
        planet = await self.get_planet(planet_id)
        if planet is None:
            return None

        planet.photo_filename = photo_filename
        await self.session.flush()
        await self.session.commit()
        logger.info("Planet %s photo set to %s", planet_id, photo_filename)
        return planet


def get_planet_repository(
    db: AsyncSession = Depends(get_db_session),
) -> PlanetRepository:
    """FastAPI dependency: a repository bound to this request's session."""
    return PlanetRepository(db)
