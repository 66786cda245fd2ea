"""
Space Facts API - Planet SQLAlchemy Model
==========================================

What:  ORM model for the `planets` table.
Who:   Used by PlanetRepository for CRUD and by Alembic for schema management.

Table Design:
    - id: integer autoincrement primary key, generated by the database
    - name: required, up to 128 characters
    - description: optional free text
    - photo_filename: set only by the photo upload endpoint; the generated
      name of a file inside UPLOAD_DIR
    - created_at / updated_at: bookkeeping, never exposed by the API
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from spacefacts.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Planet(Base):
    """
    A planet record.

    Lifecycle:
        1. Created by POST /planets (name, description)
        2. Replaced by PUT /planets/{id} (name and description together)
        3. photo_filename set by POST /planets/{id}/photo
        4. Removed by DELETE /planets/{id}
    """

    __tablename__ = "planets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(128), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    photo_filename: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Generated filename of the uploaded photo inside UPLOAD_DIR",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Stored in UTC; the API does not return them
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Planet(id={self.id}, name='{self.name}')>"
