# personcore/services/schemas/people.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from personcore.services.schemas.family import FamilyRelationshipSubmission, FamilyRelationshipRead
from personcore.services.schemas.references import ReferenceLabelRead


# ---------- Address ----------

class AddressSubmission(BaseModel):
    """
    Address payload as handed to the address collaborator.
    Structure is not validated here; unknown keys are kept.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    rt: Optional[str] = None
    rw: Optional[str] = None
    zip_code: Optional[str] = None
    province_id: Optional[str] = None
    district_id: Optional[str] = None
    subdistrict_id: Optional[str] = None
    village_id: Optional[str] = None


class AddressBlock(BaseModel):
    ktp: Optional[AddressSubmission] = None
    residence: Optional[AddressSubmission] = None
    residence_same_as_ktp: bool = False


class AddressRead(BaseModel):
    id: str
    role: str
    name: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)


class AddressPairRead(BaseModel):
    ktp: Optional[AddressRead] = None
    residence: Optional[AddressRead] = None


# ---------- Person (inbound) ----------

class PersonSubmission(BaseModel):
    """
    Inbound person submission (store and update).
    Enum and date fields stay strings here; PersonNormalizer owns their rules.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    uuid: Optional[str] = Field(default=None, max_length=36)
    name: Optional[str] = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    sex: Optional[str] = None
    dob: Optional[Union[str, date]] = None
    pob: Optional[str] = Field(default=None, max_length=255)
    blood_type: Optional[str] = None
    mother_name: Optional[str] = Field(default=None, max_length=255)
    father_name: Optional[str] = Field(default=None, max_length=255)
    total_children: Optional[int] = Field(default=None, ge=0)
    religion_id: Optional[str] = Field(default=None, max_length=64)
    country_id: Optional[str] = Field(default=None, max_length=64)
    last_education_id: Optional[str] = Field(default=None, max_length=64)
    marital_status_id: Optional[str] = Field(default=None, max_length=64)
    is_nationality: Optional[bool] = None
    phones: Optional[List[str]] = None

    address: Optional[AddressBlock] = None
    card_identity: Optional[Dict[str, Optional[str]]] = None
    family_relationship: Optional[FamilyRelationshipSubmission] = None
    props: Optional[Dict[str, Any]] = None


# ---------- Person (outbound) ----------

class PersonListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    uuid: Optional[str] = None
    name: str
    sex: Optional[str] = None
    dob: Optional[date] = None
    pob: Optional[str] = None


class PersonRead(BaseModel):
    """Enriched read: flat fields, resolved labels, derived age, nested blocks."""
    id: str
    uuid: Optional[str] = None
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    sex: Optional[str] = None
    dob: Optional[date] = None
    age: Optional[int] = None
    pob: Optional[str] = None
    blood_type: Optional[str] = None
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    total_children: Optional[int] = None
    is_nationality: Optional[bool] = None

    religion_id: Optional[str] = None
    religion: Optional[ReferenceLabelRead] = None
    last_education_id: Optional[str] = None
    last_education: Optional[ReferenceLabelRead] = None
    marital_status_id: Optional[str] = None
    marital_status: Optional[ReferenceLabelRead] = None
    country_id: Optional[str] = None

    phones: List[str] = Field(default_factory=list)
    props: Dict[str, Any] = Field(default_factory=dict)
    address: AddressPairRead = Field(default_factory=AddressPairRead)
    card_identity: Dict[str, str] = Field(default_factory=dict)
    family_relationship: Optional[FamilyRelationshipRead] = None

    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None
