# personcore/domain/dataclasses/person.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

# Scalar columns the writer copies onto the person row
PERSON_SCALAR_FIELDS = (
    "uuid",
    "name",
    "first_name",
    "last_name",
    "sex",
    "dob",
    "pob",
    "blood_type",
    "mother_name",
    "father_name",
    "total_children",
    "is_nationality",
    "religion_id",
    "last_education_id",
    "marital_status_id",
    "country_id",
    "phones",
    "props",
)

REFERENCE_FIELDS = {
    "religion_id": "Religion",
    "last_education_id": "Education",
    "marital_status_id": "MaritalStatus",
}


@dataclass
class NormalizedPerson:
    """
    Output of PersonNormalizer: only the fields the caller supplied, plus the
    derived ones (name, phones). Absent keys mean "leave unchanged" on update.
    """
    values: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def has(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    @property
    def name(self) -> Optional[str]:
        return self.values.get("name")

    @property
    def dob(self) -> Optional[date]:
        return self.values.get("dob")

    @property
    def phones(self) -> Optional[List[str]]:
        return self.values.get("phones")

    def reference_ids(self) -> Dict[str, str]:
        """category -> id for every reference id present (non-empty)."""
        return {
            category: self.values[key]
            for key, category in REFERENCE_FIELDS.items()
            if self.values.get(key)
        }
