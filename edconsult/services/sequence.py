"""Display-ID sequences backed by the ``sequences`` table."""
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from edconsult.db.models import Sequence

UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def counter_seed_statement(dialect_name: str, name: str):
    """``INSERT ... ON CONFLICT DO NOTHING`` creating the counter at zero."""
    insert = UPSERT_INSERTS[dialect_name]
    return insert(Sequence).values(name=name, value=0).on_conflict_do_nothing(index_elements=["name"])


def _ensure_counter(db: Session, name: str) -> None:
    dialect_name = db.get_bind().dialect.name
    if dialect_name in UPSERT_INSERTS:
        db.execute(counter_seed_statement(dialect_name, name))
    elif db.query(Sequence.name).filter(Sequence.name == name).first() is None:
        db.add(Sequence(name=name, value=0))
        db.flush()


def next_value(db: Session, name: str) -> int:
    """
    Atomically advance the named counter and return its new value.

    A missing counter row is created first with an insert that ignores
    conflicts, so the locked select below always has a row to lock. Two
    concurrent first calls for the same name therefore wait on each other
    instead of both inserting. The row stays locked until the caller's
    transaction ends, so no two callers receive the same value.
    """
    _ensure_counter(db, name)
    sequence = (
        db.query(Sequence)
        .filter(Sequence.name == name)
        .with_for_update()
        .populate_existing()
        .one()
    )
    sequence.value += 1
    db.flush()
    return sequence.value
