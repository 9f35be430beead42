# tests/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from testcontainers.postgres import PostgresContainer

from personcore.common.settings import get_settings
from personcore.database.models import Base  # <-- imports the models/metadata
from personcore.database.models.reference import ReferenceEntity
from personcore.domain.enums import ReferenceCategory
from personcore.services.cache.tag_cache import MemoryCacheBackend, TagCache


@pytest.fixture(scope="session")
def _postgres_url():
    """
    USE_TESTCONTAINERS=true runs the suite against a throwaway Postgres.
    Otherwise every test gets its own SQLite file.
    """
    cfg = get_settings()
    if not cfg.use_testcontainers:
        yield None
        return
    with PostgresContainer(cfg.test_db_image) as pg:
        # Force psycopg (v3) driver in the URL returned by testcontainers
        yield pg.get_connection_url().replace("psycopg2", "psycopg")


@pytest.fixture()
def db_engine(_postgres_url, tmp_path) -> Engine:
    if _postgres_url:
        engine = create_engine(_postgres_url, future=True)
    else:
        engine = create_engine(
            f"sqlite+pysqlite:///{tmp_path / 'personcore.db'}",
            connect_args={"check_same_thread": False},
            future=True,
        )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(db_engine) -> sessionmaker:
    # Same options as the application's SessionLocal
    return sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False, future=True)


@pytest.fixture()
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def cache() -> TagCache:
    return TagCache(MemoryCacheBackend(max_entries=256))


@pytest.fixture()
def refs(session_factory):
    """Seed one row per reference category and commit. Returns label -> id."""
    rows = [
        ReferenceEntity(category=ReferenceCategory.Religion, label="Islam", weight=1),
        ReferenceEntity(category=ReferenceCategory.Religion, label="Katolik", weight=2),
        ReferenceEntity(category=ReferenceCategory.Education, label="S1"),
        ReferenceEntity(category=ReferenceCategory.MaritalStatus, label="Kawin"),
        ReferenceEntity(category=ReferenceCategory.FamilyRole, label="Ibu"),
    ]
    with session_factory() as s:
        s.add_all(rows)
        s.commit()
        return {r.label: r.id for r in rows}
