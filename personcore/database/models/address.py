# personcore/database/models/address.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import Enum as SAEnum, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from personcore.database.core.main import Base
from personcore.database.core.service_object import ServiceObject, JSONType
from personcore.domain.enums import AddressRole


class Address(ServiceObject, Base):
    """
    Backing table of the default address collaborator.
    One row per (owner, role); saving the same role again overwrites it.
    """
    __tablename__ = "address"
    __table_args__ = (
        UniqueConstraint("owner_type", "owner_id", "role", name="uq_address_owner_role"),
        Index("ix_address_owner", "owner_type", "owner_id"),
    )

    owner_type: Mapped[str] = mapped_column(String(64), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[AddressRole] = mapped_column(
        SAEnum(AddressRole, name="address_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    name: Mapped[Optional[str]] = mapped_column(Text)     # street line
    payload: Mapped[Optional[dict]] = mapped_column(JSONType)  # submitted structure, verbatim

    def __repr__(self) -> str:
        return f"<Address id={self.id} {self.owner_type}:{self.owner_id} role={self.role}>"
