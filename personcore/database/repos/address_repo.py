# personcore/database/repos/address_repo.py
from __future__ import annotations

from typing import Any, Dict, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from personcore.database.models.address import Address
from personcore.domain.dataclasses.address import AddressRecord
from personcore.domain.enums import AddressRole


def to_address_record(row: Address) -> AddressRecord:
    return AddressRecord(
        id=row.id,
        owner_id=row.owner_id,
        role=AddressRole(row.role),
        name=row.name,
        payload=dict(row.payload or {}),
    )


class SqlAlchemyAddressRepo:
    """
    Default AddressPort. Rows are keyed by (owner_type, owner_id, role);
    saving a role that already exists overwrites it in place.
    """

    def __init__(self, db: Session, *, owner_type: str = "Person") -> None:
        self.db = db
        self.owner_type = owner_type

    def _get_row(self, owner_id: str, role: AddressRole) -> Address | None:
        stmt = select(Address).where(
            Address.owner_type == self.owner_type,
            Address.owner_id == owner_id,
            Address.role == AddressRole(role),
        ).limit(1)
        return self.db.execute(stmt).scalars().first()

    def save_address(self, owner_id: str, role: AddressRole, payload: Mapping[str, Any]) -> AddressRecord:
        data: Dict[str, Any] = dict(payload or {})
        row = self._get_row(owner_id, role)
        if row is None:
            row = Address(owner_type=self.owner_type, owner_id=owner_id, role=AddressRole(role))
            self.db.add(row)
        row.name = data.get("name")
        row.payload = data
        self.db.flush()
        return to_address_record(row)

    def get_addresses(self, owner_id: str) -> Dict[AddressRole, AddressRecord]:
        stmt = (
            select(Address)
            .where(Address.owner_type == self.owner_type, Address.owner_id == owner_id)
            .order_by(Address.role.asc())
        )
        return {AddressRole(r.role): to_address_record(r) for r in self.db.execute(stmt).scalars().all()}
