"""
Space Facts API - Application Package
=====================================

What: Marks the `spacefacts` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn spacefacts.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Validation / Services (Logic)     │  ← input shape, repository, photos
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database handle, async sessions
    └─────────────────────────────────────┘

    Routes never touch the engine directly: they receive a repository built
    from the per-request session of the `Database` handle held on app.state.
"""

__version__ = "1.0.0"
