# tests/services/people/test_links.py
from __future__ import annotations

import pytest

from personcore.database.models import Person
from personcore.services.people.links import LinkRegistry, default_link_registry


def test_default_registry_resolves_person(db):
    p = Person(name="Budi")
    db.add(p)
    db.commit()

    reg = default_link_registry()
    assert reg.type_tags == ["Person"]
    assert reg.resolve(db, "Person", p.id) == {"type": "Person", "id": p.id, "name": "Budi"}
    assert reg.resolve(db, "Person", "01ARZ3NDEKTSV4RRFFQ69G5FAV") is None


def test_unregistered_type(db):
    reg = LinkRegistry()
    assert not reg.is_registered("Person")
    assert not reg.is_registered(None)
    with pytest.raises(KeyError):
        reg.resolve(db, "Person", "x")


def test_register_custom_loader(db):
    reg = LinkRegistry()
    reg.register("Employee", lambda session, rid: {"type": "Employee", "id": rid})
    assert reg.resolve(db, "Employee", "E1") == {"type": "Employee", "id": "E1"}
    with pytest.raises(ValueError):
        reg.register("", lambda s, r: None)
