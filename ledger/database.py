"""SQLModel database engine and session management."""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from ledger.config import settings
from ledger.models.valuation_name import ValuationKind

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def _run_migrations(bind: Engine | None = None):
    """Run lightweight schema migrations for columns added after first release."""
    bind = bind or engine
    inspector = inspect(bind)

    if "valuation" not in inspector.get_table_names():
        return

    columns = {col["name"] for col in inspector.get_columns("valuation")}
    if "kind" not in columns:
        # Existing rows were all reconciliations before the column existed
        logger.info("Migrating: adding valuation.kind")
        with bind.connect() as conn:
            conn.execute(text(
                "ALTER TABLE valuation ADD COLUMN kind VARCHAR(32) NOT NULL "
                f"DEFAULT '{ValuationKind.RECONCILIATION.value}'"
            ))
            conn.commit()

    valuation_indexes = {idx["name"] for idx in inspector.get_indexes("valuation")}
    if "ix_valuation_kind" not in valuation_indexes:
        with bind.connect() as conn:
            conn.execute(text("CREATE INDEX ix_valuation_kind ON valuation (kind)"))
            conn.commit()

    existing_indexes = {idx["name"] for idx in inspector.get_indexes("entry")}
    if "ix_entry_entryable" not in existing_indexes:
        with bind.connect() as conn:
            conn.execute(text(
                "CREATE INDEX ix_entry_entryable ON entry (entryable_type, entryable_id)"
            ))
            conn.commit()


def create_db_and_tables(bind: Engine | None = None):
    """Create all tables. Called on startup."""
    import ledger.models  # noqa: F401  (populate metadata)

    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    _run_migrations(bind)


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session
