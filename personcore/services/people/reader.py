# personcore/services/people/reader.py
from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, List, Optional, TypeVar

from sqlalchemy.orm import Session

from personcore.database.repos.family_relationship_repo import SqlAlchemyFamilyRelationshipRepo
from personcore.database.repos.people_repo import SqlAlchemyPeopleRepo
from personcore.domain.dataclasses.person import REFERENCE_FIELDS
from personcore.domain.ports.address import AddressPort
from personcore.domain.ports.card_identity import CardIdentityPort
from personcore.domain.enums import ReferenceCategory
from personcore.services.cache.hooks import FAMILY_RELATIONSHIP_TAG, PEOPLE_TAG, reference_tag
from personcore.services.cache.tag_cache import TagCache
from personcore.services.mappers.people import to_family_read, to_list_item, to_person_read
from personcore.services.people.links import LinkRegistry
from personcore.services.people.reference_resolver import ReferenceResolver
from personcore.services.schemas.family import FamilyRelationshipRead
from personcore.services.schemas.people import PersonListItem, PersonRead

T = TypeVar("T")

FAMILY_INDEX_TTL_SEC = 24 * 60 * 60

# Labels embedded in a person detail; re-seeding any of these must bust it
PERSON_DETAIL_TAGS = [PEOPLE_TAG] + [
    reference_tag(c) for c in (*REFERENCE_FIELDS.values(), ReferenceCategory.FamilyRole.value)
]


def _cached(cache: Optional[TagCache], key: str, tags, ttl, compute: Callable[[], T], **kw) -> T:
    if cache is None:
        return compute()
    return cache.get_or_compute(key, tags, ttl, compute, **kw)


class PersonReader:
    """
    Read paths for people: an uncached `build` used by the writer for its
    read-back, and cached `show` / `index` in front of it.
    Person reads are cached until a `people` tag bust (ttl=None by default).
    """

    def __init__(
        self,
        db: Session,
        *,
        references: ReferenceResolver,
        addresses: AddressPort,
        cards: CardIdentityPort,
        card_types: Iterable[str],
        cache: Optional[TagCache] = None,
        ttl: Optional[float] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.db = db
        self.people = SqlAlchemyPeopleRepo(db)
        self.family = SqlAlchemyFamilyRelationshipRepo(db)
        self.references = references
        self.addresses = addresses
        self.cards = cards
        self.card_types = frozenset(card_types)
        self.cache = cache
        self.ttl = ttl
        self.today = today

    def build(self, person_id: str) -> Optional[PersonRead]:
        row = self.people.get(person_id)
        if row is None:
            return None
        labels = {
            field: self.references.resolve(category, getattr(row, field))
            for field, category in REFERENCE_FIELDS.items()
        }
        contact = self.family.active_for_person(row.id)
        family = None
        if contact is not None:
            family = to_family_read(contact, role=self.references.family_roles.get(contact.family_role_id))
        return to_person_read(
            row,
            today=self.today(),
            labels=labels,
            addresses=self.addresses.get_addresses(row.id),
            cards=self.cards.get_card_identities(row.id),
            allowed_card_types=self.card_types,
            family=family,
        )

    def show(self, person_id: str) -> Optional[PersonRead]:
        return _cached(
            self.cache,
            f"people:show:{person_id}",
            PERSON_DETAIL_TAGS,
            self.ttl,
            lambda: self.build(person_id),
            store_none=False,
        )

    def index(self, q: str = "", limit: int = 25) -> List[PersonListItem]:
        qn = " ".join((q or "").lower().split())
        return _cached(
            self.cache,
            f"people:index:{qn}:{limit}",
            [PEOPLE_TAG],
            self.ttl,
            lambda: [to_list_item(r) for r in self.people.search(qn, limit=limit)],
        )


class FamilyRelationshipReader:
    """Family-contact reads. The index is cached for a fixed 24h window."""

    def __init__(
        self,
        db: Session,
        *,
        references: ReferenceResolver,
        links: LinkRegistry,
        cache: Optional[TagCache] = None,
        ttl: Optional[float] = FAMILY_INDEX_TTL_SEC,
    ) -> None:
        self.db = db
        self.repo = SqlAlchemyFamilyRelationshipRepo(db)
        self.references = references
        self.links = links
        self.cache = cache
        self.ttl = ttl

    def index(self, people_id: Optional[str] = None, limit: int = 100) -> List[FamilyRelationshipRead]:
        def compute() -> List[FamilyRelationshipRead]:
            return [
                to_family_read(r, role=self.references.family_roles.get(r.family_role_id))
                for r in self.repo.list(people_id=people_id, limit=limit)
            ]

        return _cached(
            self.cache,
            f"family_relationship:index:{people_id or '*'}:{limit}",
            [FAMILY_RELATIONSHIP_TAG, reference_tag(ReferenceCategory.FamilyRole.value)],
            self.ttl,
            compute,
        )

    def show(self, relationship_id: str) -> Optional[FamilyRelationshipRead]:
        """Single contact, with its polymorphic link resolved on demand."""
        row = self.repo.get(relationship_id)
        if row is None:
            return None
        reference = None
        if row.reference_type and row.reference_id and self.links.is_registered(row.reference_type):
            reference = self.links.resolve(self.db, row.reference_type, row.reference_id)
        return to_family_read(
            row,
            role=self.references.family_roles.get(row.family_role_id),
            reference=reference,
        )
