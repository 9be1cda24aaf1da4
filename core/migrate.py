import enum
import logging
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, inspect, insert, select
from sqlalchemy.engine import Engine

from core.db import Base
import models  # noqa: F401  registers the order tables on Base.metadata

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_ledger_metadata = MetaData()

schema_version = Table(
    "schema_version",
    _ledger_metadata,
    Column("version", Integer, primary_key=True),
    Column("applied_at", DateTime, nullable=False),
)


class Migration(str, enum.Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: str) -> "Migration":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown migration {value!r}, expected one of: up, down, none")

    def __str__(self) -> str:
        return self.value


def current_version(engine: Engine) -> int | None:
    if not inspect(engine).has_table(schema_version.name):
        return None
    with engine.connect() as conn:
        return conn.scalar(select(schema_version.c.version).order_by(schema_version.c.version.desc()))


def migrate(engine: Engine, migration: Migration) -> None:
    """Apply or remove the order schema. Safe to run repeatedly."""
    if migration is Migration.NONE:
        return

    if migration is Migration.UP:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        _ledger_metadata.create_all(bind=engine, checkfirst=True)
        with engine.begin() as conn:
            applied = conn.scalar(select(schema_version.c.version).where(schema_version.c.version == SCHEMA_VERSION))
            if applied is None:
                conn.execute(
                    insert(schema_version).values(
                        version=SCHEMA_VERSION,
                        applied_at=datetime.now(timezone.utc).replace(tzinfo=None),
                    )
                )
        logger.info("Schema migrated up to version %s", SCHEMA_VERSION)
    else:
        Base.metadata.drop_all(bind=engine, checkfirst=True)
        _ledger_metadata.drop_all(bind=engine, checkfirst=True)
        logger.info("Schema migrated down")
