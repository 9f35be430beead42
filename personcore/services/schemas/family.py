# personcore/services/schemas/family.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from personcore.services.schemas.references import ReferenceCreate, ReferenceLabelRead


# ---------- Inbound ----------

class FamilyRelationshipSubmission(BaseModel):
    """
    Nested family-contact block of a person submission.
    `family_role_id` and `family_role` are mutually exclusive.
    `people_id` is accepted but never trusted: the owner is the person being saved.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=64)
    sex: Optional[str] = None
    family_role_id: Optional[str] = Field(default=None, max_length=64)
    family_role: Optional[ReferenceCreate] = None
    reference_type: Optional[str] = Field(default=None, max_length=64)
    reference_id: Optional[str] = Field(default=None, max_length=64)
    people_id: Optional[str] = None


# ---------- Outbound ----------

class FamilyRelationshipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    people_id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    sex: Optional[str] = None
    family_role_id: Optional[str] = None
    family_role: Optional[ReferenceLabelRead] = None
    reference_type: Optional[str] = None
    reference_id: Optional[str] = None
    # Resolved lazily through the LinkRegistry (single-record reads only)
    reference: Optional[Dict[str, Any]] = None
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None
