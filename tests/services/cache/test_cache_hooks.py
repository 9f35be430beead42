# tests/services/cache/test_cache_hooks.py
from __future__ import annotations

import pytest

from personcore.services.cache.hooks import (
    DEFAULT_WRITE_HOOKS,
    CacheInvalidationHooks,
    reference_tag,
)


def test_default_hooks_cover_write_paths():
    assert set(DEFAULT_WRITE_HOOKS) == {"people", "family_relationship", "reference:FamilyRole"}
    assert reference_tag("FamilyRole") == "reference:FamilyRole"


def test_fire_busts_only_registered_tags(cache):
    hooks = CacheInvalidationHooks(cache)
    calls = {"people": 0, "family": 0}

    def people():
        calls["people"] += 1
        return calls["people"]

    def family():
        calls["family"] += 1
        return calls["family"]

    cache.get_or_compute("p", ["people"], None, people)
    cache.get_or_compute("f", ["family_relationship"], None, family)

    assert hooks.fire(["people"]) == ["people"]

    cache.get_or_compute("p", ["people"], None, people)
    cache.get_or_compute("f", ["family_relationship"], None, family)
    assert calls == {"people": 2, "family": 1}


def test_register_extends_entity_type(cache):
    hooks = CacheInvalidationHooks(cache, hooks={})
    hooks.register("people", "people", "search")
    hooks.register("people", "people")
    assert hooks.tags_for(["people"]) == ["people", "search"]


def test_tags_are_deduplicated(cache):
    hooks = CacheInvalidationHooks(cache)
    hooks.register("family_relationship", "people")
    assert hooks.tags_for(["people", "family_relationship"]) == ["people", "family_relationship"]


def test_unknown_entity_type_raises(cache):
    hooks = CacheInvalidationHooks(cache)
    with pytest.raises(KeyError):
        hooks.fire(["invoice"])
