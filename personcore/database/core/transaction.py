# personcore/database/core/transaction.py
from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy import event
from sqlalchemy.orm import Session


@contextmanager
def transactional(db: Session) -> Iterator[Session]:
    """
    All-or-nothing block. Opens a transaction, or a SAVEPOINT when the caller
    already holds one, so the block can roll back without ending the outer unit.
    """
    if db.in_transaction():
        with db.begin_nested():
            yield db
    else:
        with db.begin():
            yield db


def on_commit(db: Session, fn: Callable[[], None]) -> None:
    """
    Run `fn` once the work done so far on `db` is committed.

    With no transaction open (the unit already committed) it runs right away.
    Otherwise it waits for the outermost transaction to commit; SAVEPOINT
    releases do not count, and an outer rollback drops it.
    """
    if not db.in_transaction():
        fn()
        return

    state = {"done": False}

    @event.listens_for(db, "after_commit")
    def _after_commit(session: Session) -> None:
        if state["done"] or session.get_nested_transaction() is not None:
            return
        state["done"] = True
        fn()

    @event.listens_for(db, "after_soft_rollback")
    def _after_rollback(session: Session, previous_transaction) -> None:
        if previous_transaction.parent is None:
            state["done"] = True
