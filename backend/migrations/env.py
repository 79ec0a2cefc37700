"""Alembic migration environment for the bitácora entries schema."""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import MetaData, create_engine, pool

from backend.app.config import load_settings
from backend.app.domain.entrystore.persistence import build_entries_table

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# The settings profile (or DATABASE_URL) picks the database, not alembic.ini.
DATABASE_URL = load_settings().database_url
target_metadata = MetaData()
build_entries_table(target_metadata)


def run_offline(url: str) -> None:
    """Emit the migration SQL instead of connecting."""

    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    engine = create_engine(url, poolclass=pool.NullPool, future=True)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline(DATABASE_URL)
else:
    run_online(DATABASE_URL)
