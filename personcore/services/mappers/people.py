# personcore/services/mappers/people.py
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

from personcore.database.models.person import FamilyRelationship as DBFamilyRelationship, Person as DBPerson
from personcore.domain.dataclasses.address import AddressRecord
from personcore.domain.dataclasses.reference import ReferenceLabel
from personcore.domain.enums import AddressRole
from personcore.services.schemas.family import FamilyRelationshipRead
from personcore.services.schemas.people import AddressPairRead, AddressRead, PersonListItem, PersonRead
from personcore.services.schemas.references import ReferenceLabelRead


def _enum_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    return v.value if isinstance(v, Enum) else str(v)


def _label(lbl: Optional[ReferenceLabel]) -> Optional[ReferenceLabelRead]:
    return ReferenceLabelRead(id=lbl.id, label=lbl.label) if lbl else None


def age_on(dob: Optional[date], today: date) -> Optional[int]:
    """Whole years from dob to `today`; None without a dob."""
    if dob is None:
        return None
    years = today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))
    return max(0, years)


def _address(rec: Optional[AddressRecord]) -> Optional[AddressRead]:
    if rec is None:
        return None
    return AddressRead(id=rec.id, role=_enum_str(rec.role), name=rec.name, payload=dict(rec.payload))


def to_family_read(
    row: DBFamilyRelationship,
    *,
    role: Optional[ReferenceLabel] = None,
    reference: Optional[Dict[str, Any]] = None,
) -> FamilyRelationshipRead:
    return FamilyRelationshipRead(
        id=row.id,
        people_id=row.people_id,
        name=row.name,
        phone=row.phone,
        sex=_enum_str(row.sex),
        family_role_id=row.family_role_id,
        family_role=_label(role),
        reference_type=row.reference_type,
        reference_id=row.reference_id,
        reference=reference,
        date_created=getattr(row, "date_created", None),
        last_updated=getattr(row, "last_updated", None),
    )


def to_list_item(row: DBPerson) -> PersonListItem:
    return PersonListItem(
        id=row.id,
        uuid=row.uuid,
        name=row.name,
        sex=_enum_str(row.sex),
        dob=row.dob,
        pob=row.pob,
    )


def to_person_read(
    row: DBPerson,
    *,
    today: date,
    labels: Mapping[str, Optional[ReferenceLabel]],
    addresses: Mapping[AddressRole, AddressRecord],
    cards: Mapping[str, str],
    allowed_card_types: Iterable[str],
    family: Optional[FamilyRelationshipRead] = None,
) -> PersonRead:
    """
    Enriched read. Unresolved reference ids keep their *_id but get no label;
    card types outside the allow-list are left out.
    """
    allowed = set(allowed_card_types)
    return PersonRead(
        id=row.id,
        uuid=row.uuid,
        name=row.name,
        first_name=row.first_name,
        last_name=row.last_name,
        sex=_enum_str(row.sex),
        dob=row.dob,
        age=age_on(row.dob, today),
        pob=row.pob,
        blood_type=_enum_str(row.blood_type),
        mother_name=row.mother_name,
        father_name=row.father_name,
        total_children=row.total_children,
        is_nationality=row.is_nationality,
        religion_id=row.religion_id,
        religion=_label(labels.get("religion_id")),
        last_education_id=row.last_education_id,
        last_education=_label(labels.get("last_education_id")),
        marital_status_id=row.marital_status_id,
        marital_status=_label(labels.get("marital_status_id")),
        country_id=row.country_id,
        phones=list(row.phones or []),
        props=dict(row.props or {}),
        address=AddressPairRead(
            ktp=_address(addresses.get(AddressRole.KTP)),
            residence=_address(addresses.get(AddressRole.RESIDENCE)),
        ),
        card_identity={k: v for k, v in cards.items() if k in allowed and v is not None},
        family_relationship=family,
        date_created=getattr(row, "date_created", None),
        last_updated=getattr(row, "last_updated", None),
    )
