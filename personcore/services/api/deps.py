# personcore/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from personcore.database.core.main import get_session
from personcore.services.cache.tag_cache import TagCache, get_cache
from personcore.services.people.factory import (
    build_family_reader,
    build_person_reader,
    build_person_writer,
    build_reference_resolver,
)
from personcore.services.people.reader import FamilyRelationshipReader, PersonReader
from personcore.services.people.reference_resolver import ReferenceResolver
from personcore.services.people.writer import PersonAggregateWriter


def get_db() -> Generator[Session, None, None]:
    """
    Plain request-scoped session. No request-wide transaction here: the
    aggregate writer opens (and commits) its own unit of work.
    """
    yield from get_session()


def get_tag_cache() -> TagCache:
    return get_cache()


def get_person_writer(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_tag_cache),
) -> PersonAggregateWriter:
    return build_person_writer(db, cache=cache)


def get_person_reader(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_tag_cache),
) -> PersonReader:
    return build_person_reader(db, cache=cache)


def get_family_reader(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_tag_cache),
) -> FamilyRelationshipReader:
    return build_family_reader(db, cache=cache)


def get_reference_resolver(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_tag_cache),
) -> ReferenceResolver:
    return build_reference_resolver(db, cache=cache)
