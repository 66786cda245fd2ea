"""
Alembic Migration Environment
===============================

What:  Applies the planets schema migrations.
How:   The target URL always comes from DATABASE_URL (spacefacts settings),
       never from alembic.ini, so migrations hit the same database the API
       uses. Online runs open one unpooled async engine and hand a sync
       connection to Alembic via run_sync().
Who:   `alembic upgrade head` from the backend/ directory.

SQLite:
    ALTER TABLE support is limited, so SQLite URLs run in batch mode
    (table copy-and-move) for any future column changes.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from spacefacts.config import settings
from spacefacts.database import Base
from spacefacts.models.planet import Planet  # noqa: F401

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

DATABASE_URL = settings.database_url
RENDER_AS_BATCH = make_url(DATABASE_URL).get_backend_name() == "sqlite"


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=RENDER_AS_BATCH,
        **kwargs,
    )


def migrate_offline() -> None:
    """`alembic upgrade head --sql`: print the DDL instead of running it."""
    _configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate_with(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = create_async_engine(DATABASE_URL, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate_with)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
