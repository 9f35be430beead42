# personcore/database/core/main.py
from __future__ import annotations

from functools import lru_cache
from typing import Iterator, List

from sqlalchemy import MetaData, create_engine, event, Column, Table
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from personcore.common.settings import get_settings

_settings = get_settings()

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id", "date_created", "last_updated", "data_origin", "meta_data")


def _app_schema() -> str | None:
    schema = _settings.db_schema
    return schema if schema and schema.lower() != "public" else None


class Base(DeclarativeBase):
    # Set a default schema to keep DDL explicit and consistent
    metadata = MetaData(
        schema=_app_schema(),
        naming_convention=NAMING_CONVENTION,
    )

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        # Stable ordering: ServiceObject fields first, then everything else in their original order
        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}

        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """
    Build the application engine on first use so importing models never
    requires a reachable database (or even its driver).
    """
    url = _settings.database_url
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=_settings.db.echo, future=True)
    else:
        engine = create_engine(
            url,
            echo=_settings.db.echo,
            pool_size=_settings.db.pool_size,
            max_overflow=_settings.db.max_overflow,
            pool_pre_ping=_settings.db.pool_pre_ping,
            pool_recycle=_settings.db.pool_recycle,
            future=True,
        )

    # Ensure the app schema is first, then public (so extensions remain visible)
    schema = _app_schema()
    if schema and not url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def _set_search_path(dbapi_conn, _):
            with dbapi_conn.cursor() as cur:
                cur.execute(f'SET search_path TO "{schema}", public')

    return engine


# Unbound on purpose: callers bind per use (app engine or a test engine).
SessionLocal = sessionmaker(expire_on_commit=False, future=True, autoflush=False)


def get_session() -> Iterator[Session]:
    """
    FastAPI-friendly dependency that yields a plain Session.
    The aggregate writer owns its transaction; this only guarantees cleanup.
    """
    session: Session = SessionLocal(bind=get_engine())
    try:
        yield session
    finally:
        session.close()
