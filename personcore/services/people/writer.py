# personcore/services/people/writer.py
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from personcore.common.fields import clean, get_field, provided_fields
from personcore.common.logging import get_logger
from personcore.database.core.transaction import on_commit, transactional
from personcore.database.repos.address_repo import SqlAlchemyAddressRepo
from personcore.database.repos.card_identity_repo import SqlAlchemyCardIdentityRepo
from personcore.database.repos.family_relationship_repo import SqlAlchemyFamilyRelationshipRepo
from personcore.database.repos.people_repo import SqlAlchemyPeopleRepo
from personcore.database.repos.reference_repo import SqlAlchemyReferenceRepo
from personcore.domain.dataclasses.person import NormalizedPerson
from personcore.domain.errors import PersonNotFoundError, StorageError
from personcore.domain.policies.address_composer import compose_block
from personcore.domain.policies.person_normalizer import PersonNormalizer
from personcore.domain.ports.address import AddressPort
from personcore.domain.ports.card_identity import CardIdentityPort
from personcore.domain.ports.reference import ReferenceStorePort
from personcore.services.cache.hooks import CacheInvalidationHooks
from personcore.services.people.family_resolver import FamilyContactResolver
from personcore.services.people.links import LinkRegistry, default_link_registry
from personcore.services.people.reader import PersonReader
from personcore.services.people.reference_resolver import ReferenceResolver
from personcore.services.schemas.people import PersonRead

logger = get_logger(__name__)


class PersonAggregateWriter:
    """
    Saves a whole person submission as one unit:
      person row -> address pair -> identity cards -> family contact.

    Validation (name/date/enum rules, family-role ambiguity) runs before the
    transaction opens. Everything else runs inside it; any failure rolls the
    whole aggregate back. Cache tags are busted only once the unit is
    committed: when the caller already holds a transaction, that is when the
    caller commits it.

    `card_types` is the allow-list of identity-card tags to persist; other
    tags are dropped without error.
    """

    def __init__(
        self,
        db: Session,
        *,
        card_types: Iterable[str],
        hooks: Optional[CacheInvalidationHooks] = None,
        references: Optional[ReferenceResolver] = None,
        reference_store: Optional[ReferenceStorePort] = None,
        addresses: Optional[AddressPort] = None,
        cards: Optional[CardIdentityPort] = None,
        links: Optional[LinkRegistry] = None,
        normalizer: Optional[PersonNormalizer] = None,
    ) -> None:
        self.db = db
        self.card_types = frozenset(card_types)
        self.hooks = hooks

        self.people_repo = SqlAlchemyPeopleRepo(db)
        self.family_repo = SqlAlchemyFamilyRelationshipRepo(db)
        self.reference_store: ReferenceStorePort = reference_store or SqlAlchemyReferenceRepo(db)
        self.references = references or ReferenceResolver(self.reference_store)
        self.addresses: AddressPort = addresses or SqlAlchemyAddressRepo(db)
        self.cards: CardIdentityPort = cards or SqlAlchemyCardIdentityRepo(db)
        self.links = links or default_link_registry()
        self.normalizer = normalizer or PersonNormalizer()
        self.family = FamilyContactResolver(self.reference_store, self.links)

        # Read-back runs inside the transaction: never through the cache.
        self.read_back = PersonReader(
            db,
            references=ReferenceResolver(self.reference_store),
            addresses=self.addresses,
            cards=self.cards,
            card_types=self.card_types,
        )

    # ---------------- public ----------------

    def store(self, submission: Any) -> PersonRead:
        normalized = self.normalizer.normalize(submission)
        self.family.validate(get_field(submission, "family_relationship"))
        return self._write(None, submission, normalized)

    def update(self, person_id: str, submission: Any) -> PersonRead:
        """Partial update: fields absent from the submission keep their stored value."""
        normalized = self.normalizer.normalize(submission, partial=True)
        self.family.validate(get_field(submission, "family_relationship"))
        return self._write(person_id, submission, normalized)

    def save(self, submission: Any) -> PersonRead:
        person_id = clean(get_field(submission, "id"))
        if person_id:
            return self.update(person_id, submission)
        return self.store(submission)

    # ---------------- pipeline ----------------

    def _write(self, person_id: Optional[str], submission: Any, normalized: NormalizedPerson) -> PersonRead:
        touched: List[str] = ["people"]
        try:
            with transactional(self.db):
                for field, rid in self.references.missing(normalized).items():
                    logger.warning("person %s: %s=%s does not resolve; stored as given", person_id or "<new>", field, rid)

                if person_id is None:
                    person = self.people_repo.create(normalized.values)
                else:
                    person = self.people_repo.get_for_update(person_id)
                    if person is None:
                        raise PersonNotFoundError(person_id)
                    self.normalizer.rederive_name(normalized, person.first_name, person.last_name)
                    self.people_repo.update(person, normalized.values)

                self._save_addresses(person.id, submission)
                self._save_cards(person.id, submission)
                touched += self._save_family(person.id, submission)

                result = self.read_back.build(person.id)
        except SQLAlchemyError as ex:
            logger.error("person %s: save failed, rolled back: %s", person_id or "<new>", ex)
            raise StorageError("Person could not be saved") from ex

        if self.hooks is not None:
            hooks = self.hooks
            on_commit(self.db, lambda: hooks.fire(touched))
        logger.info("person %s %s (%s)", result.id, "updated" if person_id else "stored", ", ".join(touched))
        return result

    def _save_addresses(self, person_id: str, submission: Any) -> None:
        if "address" not in provided_fields(submission):
            return
        pair = compose_block(get_field(submission, "address"))
        for role, payload in pair.by_role():
            self.addresses.save_address(person_id, role, payload)

    def _save_cards(self, person_id: str, submission: Any) -> None:
        cards = get_field(submission, "card_identity") or {}
        for type_tag, value in cards.items():
            if type_tag not in self.card_types:
                logger.debug("person %s: card identity type %r not allowed; dropped", person_id, type_tag)
                continue
            value = clean(value)
            if value is None:
                continue
            self.cards.save_card_identity(person_id, type_tag, str(value))

    def _save_family(self, person_id: str, submission: Any) -> List[str]:
        """Upsert (or, on an explicit null, soft-delete) the contact. Returns touched entity types."""
        if "family_relationship" not in provided_fields(submission):
            return []
        family_input = get_field(submission, "family_relationship")

        if family_input is None:
            current = self.family_repo.active_for_person(person_id)
            if current is None:
                return []
            self.family_repo.soft_delete(current)
            return ["family_relationship"]

        record = self.family.resolve(family_input, person_id)
        if record is None:
            return []
        self.family_repo.upsert(record)
        touched = ["family_relationship"]
        if record.role_created:
            touched.append("reference:FamilyRole")
        return touched
