# personcore/domain/dataclasses/family.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class FamilyContactRecord:
    """
    Family contact ready to upsert. `person_id` is always the owning person
    passed by the writer; `values` holds only the fields the caller supplied.
    """
    person_id: str
    family_role_id: Optional[str] = None
    values: Dict[str, Any] = field(default_factory=dict)
    role_created: bool = False

    def __post_init__(self):
        if not self.person_id:
            raise ValueError("person_id is required")

    def as_row(self) -> Dict[str, Any]:
        row = dict(self.values)
        row["people_id"] = self.person_id
        if self.family_role_id is not None:
            row["family_role_id"] = self.family_role_id
        return row
