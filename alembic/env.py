from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from marketadmin.config import settings
from marketadmin.database import Base
from marketadmin import models  # noqa: F401 - registers every table

config = context.config

# Callers that own logging (the test suite) pass configure_logger=False.
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Upgrade the database named by DATABASE_URL, or a connection handed in by the caller."""
    connection = config.attributes.get("connection")
    if connection is not None:
        run_migrations(connection)
        return

    engine = create_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            run_migrations(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    raise RuntimeError("Offline (--sql) migrations are not supported; run against a database.")

run_migrations_online()
