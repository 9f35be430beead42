from __future__ import annotations
from typing import List, Optional, Protocol

from personcore.domain.dataclasses.reference import ReferenceLabel
from personcore.domain.enums import ReferenceCategory

class ReferenceStorePort(Protocol):
    def get(self, category: ReferenceCategory, reference_id: str) -> Optional[ReferenceLabel]: ...
    def list(self, category: ReferenceCategory) -> List[ReferenceLabel]: ...
    def create(self, category: ReferenceCategory, label: str, *, weight: Optional[int] = None) -> ReferenceLabel: ...
