# personcore/services/schemas/references.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReferenceCreate(BaseModel):
    """Nested payload used to create a reference entity inline (family role)."""
    name: str = Field(..., min_length=1, max_length=255)
    weight: Optional[int] = None


class ReferenceLabelRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str


class ReferenceRead(ReferenceLabelRead):
    category: str
    weight: Optional[int] = None
