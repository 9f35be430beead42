# personcore/services/people/links.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from personcore.database.models.person import Person

# (session, id) -> small dict describing the linked record, or None if gone
LinkLoader = Callable[[Session, str], Optional[Dict[str, Any]]]


class LinkRegistry:
    """
    Closed set of polymorphic link targets for family contacts.
    A link is an explicit (type tag, id) pair; only registered tags are
    accepted on write, and the loader runs only when a contact is read.
    """

    def __init__(self) -> None:
        self._loaders: Dict[str, LinkLoader] = {}

    def register(self, type_tag: str, loader: LinkLoader) -> None:
        if not type_tag:
            raise ValueError("type_tag is required")
        self._loaders[type_tag] = loader

    def is_registered(self, type_tag: Optional[str]) -> bool:
        return bool(type_tag) and type_tag in self._loaders

    @property
    def type_tags(self) -> List[str]:
        return sorted(self._loaders)

    def resolve(self, db: Session, type_tag: str, reference_id: str) -> Optional[Dict[str, Any]]:
        loader = self._loaders.get(type_tag)
        if loader is None:
            raise KeyError(f"Unregistered link type {type_tag!r}")
        return loader(db, reference_id)


def _load_person(db: Session, reference_id: str) -> Optional[Dict[str, Any]]:
    row = db.get(Person, reference_id)
    if row is None:
        return None
    return {"type": "Person", "id": row.id, "name": row.name}


def default_link_registry() -> LinkRegistry:
    reg = LinkRegistry()
    reg.register("Person", _load_person)
    return reg
