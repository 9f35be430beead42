# personcore/services/people/reference_resolver.py
from __future__ import annotations

from typing import Dict, List, Optional

from personcore.domain.dataclasses.person import NormalizedPerson, REFERENCE_FIELDS
from personcore.domain.dataclasses.reference import ReferenceLabel
from personcore.domain.enums import ReferenceCategory
from personcore.domain.errors import ReferenceNotFoundError
from personcore.domain.ports.reference import ReferenceStorePort
from personcore.services.cache.hooks import reference_tag
from personcore.services.cache.tag_cache import TagCache


class ReferenceCategoryFacade:
    """Typed view over one category of the shared reference store."""

    def __init__(self, resolver: "ReferenceResolver", category: ReferenceCategory) -> None:
        self.resolver = resolver
        self.category = category

    def get(self, reference_id: Optional[str]) -> Optional[ReferenceLabel]:
        return self.resolver.resolve(self.category, reference_id)

    def require(self, reference_id: str) -> ReferenceLabel:
        return self.resolver.require(self.category, reference_id)

    def all(self) -> List[ReferenceLabel]:
        return self.resolver.list(self.category)


class ReferenceResolver:
    """
    Read-only lookups of religion / education / marital status / family role.

    Results are cached per category (tag `reference:<Category>`). Reference
    data is seeded by administrative tooling, which must call `invalidate`
    after changing it; nothing in the write pipeline does that for them.
    Unknown ids are not cached, so a later seed becomes visible immediately.
    Pass cache=None for uncached lookups (e.g. inside a write transaction).
    """

    def __init__(
        self,
        store: ReferenceStorePort,
        cache: Optional[TagCache] = None,
        *,
        ttl: Optional[float] = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self.ttl = ttl

        self.religions = ReferenceCategoryFacade(self, ReferenceCategory.Religion)
        self.educations = ReferenceCategoryFacade(self, ReferenceCategory.Education)
        self.marital_statuses = ReferenceCategoryFacade(self, ReferenceCategory.MaritalStatus)
        self.family_roles = ReferenceCategoryFacade(self, ReferenceCategory.FamilyRole)

    def facade(self, category: ReferenceCategory | str) -> ReferenceCategoryFacade:
        return ReferenceCategoryFacade(self, ReferenceCategory(category))

    def resolve(self, category: ReferenceCategory | str, reference_id: Optional[str]) -> Optional[ReferenceLabel]:
        if not reference_id:
            return None
        category = ReferenceCategory(category)
        if self.cache is None:
            return self.store.get(category, reference_id)
        return self.cache.get_or_compute(
            f"reference:{category.value}:{reference_id}",
            [reference_tag(category.value)],
            self.ttl,
            lambda: self.store.get(category, reference_id),
            store_none=False,
        )

    def require(self, category: ReferenceCategory | str, reference_id: str) -> ReferenceLabel:
        label = self.resolve(category, reference_id)
        if label is None:
            raise ReferenceNotFoundError(str(ReferenceCategory(category).value), reference_id)
        return label

    def list(self, category: ReferenceCategory | str) -> List[ReferenceLabel]:
        category = ReferenceCategory(category)
        if self.cache is None:
            return self.store.list(category)
        return self.cache.get_or_compute(
            f"reference:{category.value}:all",
            [reference_tag(category.value)],
            self.ttl,
            lambda: self.store.list(category),
        )

    def missing(self, normalized: NormalizedPerson) -> Dict[str, str]:
        """field -> id for every reference id on the person that does not resolve."""
        out: Dict[str, str] = {}
        for field, category in REFERENCE_FIELDS.items():
            rid = normalized.get(field)
            if rid and self.resolve(category, rid) is None:
                out[field] = rid
        return out

    def invalidate(self, category: ReferenceCategory | str) -> None:
        """Out-of-band hook for seed/admin tooling."""
        if self.cache is not None:
            self.cache.invalidate_tags(reference_tag(ReferenceCategory(category).value))
