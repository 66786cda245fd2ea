"""
Space Facts API - Services Layer
=================================

Service Inventory:
    - PlanetRepository: CRUD over the planets table, bound to one request session
    - PhotoStorage: photo type/size checks, storage, lookup and cleanup

Both are handed to routes through FastAPI dependencies
(get_planet_repository, get_photo_storage), never imported as globals.
"""
