# personcore/database/repos/card_identity_repo.py
from __future__ import annotations

from typing import Dict

from sqlalchemy import select
from sqlalchemy.orm import Session

from personcore.database.models.card_identity import CardIdentity


class SqlAlchemyCardIdentityRepo:
    """Default CardIdentityPort: one value per (owner, type tag)."""

    def __init__(self, db: Session, *, owner_type: str = "Person") -> None:
        self.db = db
        self.owner_type = owner_type

    def save_card_identity(self, owner_id: str, type_tag: str, value: str) -> None:
        stmt = select(CardIdentity).where(
            CardIdentity.owner_type == self.owner_type,
            CardIdentity.owner_id == owner_id,
            CardIdentity.type == type_tag,
        ).limit(1)
        row = self.db.execute(stmt).scalars().first()
        if row is None:
            row = CardIdentity(owner_type=self.owner_type, owner_id=owner_id, type=type_tag)
            self.db.add(row)
        row.value = value
        self.db.flush()

    def get_card_identities(self, owner_id: str) -> Dict[str, str]:
        stmt = (
            select(CardIdentity)
            .where(CardIdentity.owner_type == self.owner_type, CardIdentity.owner_id == owner_id)
            .order_by(CardIdentity.type.asc())
        )
        return {r.type: r.value for r in self.db.execute(stmt).scalars().all()}
