# personcore/database/repos/reference_repo.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from personcore.database.models.reference import ReferenceEntity
from personcore.domain.dataclasses.reference import ReferenceLabel
from personcore.domain.enums import ReferenceCategory


def to_reference_label(row: ReferenceEntity) -> ReferenceLabel:
    category = row.category.value if isinstance(row.category, ReferenceCategory) else str(row.category)
    return ReferenceLabel(id=row.id, label=row.label, category=category, weight=row.weight)


class SqlAlchemyReferenceRepo:
    """ReferenceStorePort over the single discriminated `reference_entity` table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, category: ReferenceCategory, reference_id: str) -> Optional[ReferenceLabel]:
        if not reference_id:
            return None
        stmt = select(ReferenceEntity).where(
            ReferenceEntity.id == reference_id,
            ReferenceEntity.category == ReferenceCategory(category),
        ).limit(1)
        row = self.db.execute(stmt).scalars().first()
        return to_reference_label(row) if row else None

    def list(self, category: ReferenceCategory) -> List[ReferenceLabel]:
        stmt = (
            select(ReferenceEntity)
            .where(ReferenceEntity.category == ReferenceCategory(category))
            .order_by(ReferenceEntity.weight.asc().nulls_last(), ReferenceEntity.label.asc())
        )
        return [to_reference_label(r) for r in self.db.execute(stmt).scalars().all()]

    def create(self, category: ReferenceCategory, label: str, *, weight: Optional[int] = None) -> ReferenceLabel:
        """
        Insert a reference row, or return the existing one with the same
        (category, label) so repeated nested submissions do not collide.
        """
        label = (label or "").strip()
        if not label:
            raise ValueError("Reference label is required")
        existing = self.db.execute(
            select(ReferenceEntity).where(
                ReferenceEntity.category == ReferenceCategory(category),
                ReferenceEntity.label == label,
            ).limit(1)
        ).scalars().first()
        if existing:
            return to_reference_label(existing)

        obj = ReferenceEntity(category=ReferenceCategory(category), label=label, weight=weight)
        self.db.add(obj)
        self.db.flush()  # ensure id
        return to_reference_label(obj)
