from __future__ import annotations
import os
from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

# raw SQL migrations; no ORM metadata
config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

BOOKSTORE_DSN = os.environ.get("BOOKSTORE_DSN", "sqlite:///bookstore.db")
target_metadata = None

def run_migrations_offline():
    context.configure(
        url=BOOKSTORE_DSN,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = create_engine(BOOKSTORE_DSN, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
