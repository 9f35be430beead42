# tests/services/conftest.py
from __future__ import annotations
import pytest
from starlette.testclient import TestClient

from personcore.services.api.app import create_app
from personcore.services.api.deps import get_db, get_tag_cache


@pytest.fixture()
def api_client(session_factory, cache):
    """
    A TestClient whose `get_db` dependency yields a fresh Session per request
    on the test engine (like production), and whose cache is the per-test one.
    """
    app = create_app()

    def _override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_tag_cache] = lambda: cache

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
