# personcore/common/fields.py
from __future__ import annotations

from typing import Any, Mapping, Set


def get_field(obj: Any, key: str, default=None):
    """Read `key` from a mapping or an attribute-style object (pydantic, dataclass)."""
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def provided_fields(obj: Any) -> Set[str]:
    """Keys the caller actually sent: pydantic `model_fields_set`, or mapping keys."""
    if obj is None:
        return set()
    if isinstance(obj, Mapping):
        return set(obj.keys())
    fields_set = getattr(obj, "model_fields_set", None)
    if fields_set is not None:
        return set(fields_set)
    return {k for k in vars(obj) if not k.startswith("_")}


def clean(v: Any) -> Any:
    """Strip strings; blank strings become None. Other values pass through."""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v
