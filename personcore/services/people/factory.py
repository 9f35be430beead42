# personcore/services/people/factory.py
"""
Wiring helpers: bind settings and the shared cache to the session-scoped
services. Routers and scripts go through these.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from personcore.common.settings import Settings, get_settings
from personcore.database.repos.address_repo import SqlAlchemyAddressRepo
from personcore.database.repos.card_identity_repo import SqlAlchemyCardIdentityRepo
from personcore.database.repos.reference_repo import SqlAlchemyReferenceRepo
from personcore.services.cache.hooks import CacheInvalidationHooks
from personcore.services.cache.tag_cache import TagCache, get_cache
from personcore.services.people.links import default_link_registry
from personcore.services.people.reader import FamilyRelationshipReader, PersonReader
from personcore.services.people.reference_resolver import ReferenceResolver
from personcore.services.people.writer import PersonAggregateWriter


def build_reference_resolver(
    db: Session, *, cache: Optional[TagCache] = None, cfg: Optional[Settings] = None
) -> ReferenceResolver:
    cfg = cfg or get_settings()
    return ReferenceResolver(
        SqlAlchemyReferenceRepo(db),
        cache if cache is not None else get_cache(),
        ttl=cfg.cache.reference_ttl_sec,
    )


def build_person_writer(
    db: Session, *, cache: Optional[TagCache] = None, cfg: Optional[Settings] = None
) -> PersonAggregateWriter:
    cfg = cfg or get_settings()
    cache = cache if cache is not None else get_cache()
    store = SqlAlchemyReferenceRepo(db)
    return PersonAggregateWriter(
        db,
        card_types=cfg.people.card_identity_types,
        hooks=CacheInvalidationHooks(cache),
        references=build_reference_resolver(db, cache=cache, cfg=cfg),
        reference_store=store,
    )


def build_person_reader(
    db: Session, *, cache: Optional[TagCache] = None, cfg: Optional[Settings] = None
) -> PersonReader:
    cfg = cfg or get_settings()
    cache = cache if cache is not None else get_cache()
    return PersonReader(
        db,
        references=build_reference_resolver(db, cache=cache, cfg=cfg),
        addresses=SqlAlchemyAddressRepo(db),
        cards=SqlAlchemyCardIdentityRepo(db),
        card_types=cfg.people.card_identity_types,
        cache=cache,
        ttl=cfg.cache.people_index_ttl_sec,
    )


def build_family_reader(
    db: Session, *, cache: Optional[TagCache] = None, cfg: Optional[Settings] = None
) -> FamilyRelationshipReader:
    cfg = cfg or get_settings()
    cache = cache if cache is not None else get_cache()
    return FamilyRelationshipReader(
        db,
        references=build_reference_resolver(db, cache=cache, cfg=cfg),
        links=default_link_registry(),
        cache=cache,
        ttl=cfg.cache.family_index_ttl_sec,
    )
