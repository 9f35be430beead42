# personcore/database/repos/family_relationship_repo.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from personcore.database.models.person import FamilyRelationship
from personcore.domain.dataclasses.family import FamilyContactRecord

_WRITABLE = ("name", "phone", "sex", "family_role_id", "reference_type", "reference_id")


class SqlAlchemyFamilyRelationshipRepo:
    """
    Family contacts are never created on their own: `upsert` is called by the
    aggregate writer with a record already scoped to its person.
    Reads skip soft-deleted rows unless asked otherwise.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, relationship_id: str, *, include_deleted: bool = False) -> Optional[FamilyRelationship]:
        stmt = select(FamilyRelationship).where(FamilyRelationship.id == relationship_id)
        if not include_deleted:
            stmt = stmt.where(FamilyRelationship.deleted_at.is_(None))
        return self.db.execute(stmt.limit(1)).scalars().first()

    def active_for_person(self, person_id: str) -> Optional[FamilyRelationship]:
        stmt = (
            select(FamilyRelationship)
            .where(
                FamilyRelationship.people_id == person_id,
                FamilyRelationship.deleted_at.is_(None),
            )
            .order_by(FamilyRelationship.id.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def list(self, *, people_id: Optional[str] = None, limit: int = 100) -> List[FamilyRelationship]:
        stmt = select(FamilyRelationship).where(FamilyRelationship.deleted_at.is_(None))
        if people_id:
            stmt = stmt.where(FamilyRelationship.people_id == people_id)
        stmt = stmt.order_by(FamilyRelationship.id.asc()).limit(limit)
        return self.db.execute(stmt).scalars().all()

    def upsert(self, record: FamilyContactRecord) -> FamilyRelationship:
        """Update the person's active contact in place, or create the first one."""
        row = self.active_for_person(record.person_id)
        if row is None:
            row = FamilyRelationship(people_id=record.person_id)
            self.db.add(row)
        data = record.as_row()
        for key in _WRITABLE:
            if key in data:
                setattr(row, key, data[key])
        row.people_id = record.person_id  # owner never comes from nested input
        self.db.flush()
        return row

    def soft_delete(self, row: FamilyRelationship) -> FamilyRelationship:
        if row.deleted_at is None:
            row.deleted_at = datetime.now(timezone.utc)
            self.db.flush()
        return row
