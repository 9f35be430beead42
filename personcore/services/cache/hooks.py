# personcore/services/cache/hooks.py
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from personcore.common.logging import get_logger
from personcore.services.cache.tag_cache import TagCache

log = get_logger(__name__)

PEOPLE_TAG = "people"
FAMILY_RELATIONSHIP_TAG = "family_relationship"


def reference_tag(category: str) -> str:
    return f"reference:{category}"


# entity type touched by a write path -> cache tags it must bust
DEFAULT_WRITE_HOOKS: Dict[str, tuple] = {
    "people": (PEOPLE_TAG,),
    "family_relationship": (FAMILY_RELATIONSHIP_TAG,),
    "reference:FamilyRole": (reference_tag("FamilyRole"),),
}


class CacheInvalidationHooks:
    """
    Post-commit hook list keyed by entity type. Write paths declare the entity
    types they touched; `fire` busts exactly the tags registered for them.
    """

    def __init__(self, cache: TagCache, hooks: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        self.cache = cache
        self._hooks: Dict[str, List[str]] = {
            k: list(v) for k, v in (DEFAULT_WRITE_HOOKS if hooks is None else hooks).items()
        }

    def register(self, entity_type: str, *tags: str) -> None:
        bucket = self._hooks.setdefault(entity_type, [])
        for t in tags:
            if t not in bucket:
                bucket.append(t)

    def tags_for(self, entity_types: Iterable[str]) -> List[str]:
        out: List[str] = []
        for et in entity_types:
            tags = self._hooks.get(et)
            if tags is None:
                raise KeyError(f"No cache hook registered for entity type {et!r}")
            for t in tags:
                if t not in out:
                    out.append(t)
        return out

    def fire(self, entity_types: Iterable[str]) -> List[str]:
        tags = self.tags_for(entity_types)
        if tags:
            self.cache.invalidate_tags(*tags)
            log.debug("cache tags invalidated: %s", ", ".join(tags))
        return tags
