# personcore/database/models/person.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, List

from sqlalchemy import (
    Boolean, Date, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, String
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from personcore.common.naming.ulid import ULID_LENGTH
from personcore.database.core.main import Base
from personcore.database.core.service_object import ServiceObject, JSONType
from personcore.domain.enums import BloodType, Sex


def _enum(enum_cls, name: str) -> SAEnum:
    # Persist the literal values ("A+", "Male"), not the member names
    return SAEnum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e])


# =======================
# People
# =======================
class Person(ServiceObject, Base):
    """
    A person record:
      - full name plus optional parts (name is derived from parts when absent)
      - demographics and reference ids into `reference_entity`
      - owns zero-or-one active FamilyRelationship
    Addresses and identity cards are owned through their collaborators,
    keyed by (owner_type="Person", owner_id=id).
    """
    __tablename__ = "people"
    __table_args__ = (
        Index("ix_people_name", "name"),
        Index("ix_people_uuid", "uuid"),
    )

    uuid: Mapped[Optional[str]] = mapped_column(String(36))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(255))
    last_name: Mapped[Optional[str]] = mapped_column(String(255))
    sex: Mapped[Optional[Sex]] = mapped_column(_enum(Sex, "person_sex"))
    dob: Mapped[Optional[date]] = mapped_column(Date)
    pob: Mapped[Optional[str]] = mapped_column(String(255))
    blood_type: Mapped[Optional[BloodType]] = mapped_column(_enum(BloodType, "blood_type"))
    mother_name: Mapped[Optional[str]] = mapped_column(String(255))
    father_name: Mapped[Optional[str]] = mapped_column(String(255))
    total_children: Mapped[Optional[int]] = mapped_column(Integer)
    is_nationality: Mapped[Optional[bool]] = mapped_column(Boolean)

    # References are stored as given, so the columns are wider than a ULID;
    # unknown ids are tolerated here and dropped from enriched reads instead.
    religion_id: Mapped[Optional[str]] = mapped_column(String(64))
    last_education_id: Mapped[Optional[str]] = mapped_column(String(64))
    marital_status_id: Mapped[Optional[str]] = mapped_column(String(64))
    country_id: Mapped[Optional[str]] = mapped_column(String(64))

    phones: Mapped[Optional[list]] = mapped_column(JSONType)
    props: Mapped[Optional[dict]] = mapped_column(JSONType)

    family_relationships: Mapped[List["FamilyRelationship"]] = relationship(
        "FamilyRelationship",
        back_populates="person",
        cascade="all, delete-orphan",
        order_by="FamilyRelationship.id",
    )

    def __repr__(self) -> str:
        return f"<Person id={self.id} name={self.name!r}>"


class FamilyRelationship(ServiceObject, Base):
    """
    Lightweight family contact owned by exactly one Person.
    `reference_type` + `reference_id` optionally link it to another record;
    the type tag must be registered with the LinkRegistry.
    Soft-deleted rows keep `deleted_at` and are retained for audit.
    """
    __tablename__ = "family_relationship"
    __table_args__ = (
        Index("ix_family_relationship_people_id", "people_id"),
        Index("ix_family_relationship_reference", "reference_type", "reference_id"),
    )

    people_id: Mapped[str] = mapped_column(
        String(ULID_LENGTH),
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(64))
    sex: Mapped[Optional[Sex]] = mapped_column(_enum(Sex, "family_relationship_sex"))
    family_role_id: Mapped[Optional[str]] = mapped_column(String(64))
    reference_type: Mapped[Optional[str]] = mapped_column(String(64))
    reference_id: Mapped[Optional[str]] = mapped_column(String(64))
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    person: Mapped["Person"] = relationship("Person", back_populates="family_relationships")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return f"<FamilyRelationship id={self.id} people_id={self.people_id} name={self.name!r}>"
