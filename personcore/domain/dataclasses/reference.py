# personcore/domain/dataclasses/reference.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ReferenceLabel:
    id: str
    label: str
    category: Optional[str] = None
    weight: Optional[int] = None
