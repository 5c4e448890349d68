from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

from app.db.base import Base
from app.db.models.user_model import User  # noqa: F401
from app.db.models.contact_model import Contact  # noqa: F401
from app.core.config import settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    # `alembic -x db_url=...` wins over the app settings.
    override = context.get_x_argument(as_dictionary=True).get("db_url")
    if override:
        return override
    # Alembic runs on a sync engine.
    return settings.database_url.replace("+asyncpg", "")


def run_migrations_offline():
    """Emit SQL for the contacts schema without a live database."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
