# personcore/database/models/card_identity.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from personcore.database.core.main import Base
from personcore.database.core.service_object import ServiceObject


class CardIdentity(ServiceObject, Base):
    """Identity-card value (NIK, passport, ...) per owner and type tag."""
    __tablename__ = "card_identity"
    __table_args__ = (
        UniqueConstraint("owner_type", "owner_id", "type", name="uq_card_identity_owner_type"),
        Index("ix_card_identity_owner", "owner_type", "owner_id"),
    )

    owner_type: Mapped[str] = mapped_column(String(64), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[Optional[str]] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<CardIdentity {self.owner_type}:{self.owner_id} {self.type}={self.value!r}>"
