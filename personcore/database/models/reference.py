# personcore/database/models/reference.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import Enum as SAEnum, Integer, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from personcore.database.core.main import Base
from personcore.database.core.service_object import ServiceObject, JSONType
from personcore.domain.enums import ReferenceCategory


class ReferenceEntity(ServiceObject, Base):
    """
    Shared lookup rows (religion, education, marital status, family role).
    One physical table; `category` tells the logical types apart.
    """
    __tablename__ = "reference_entity"
    __table_args__ = (
        UniqueConstraint("category", "label", name="uq_reference_entity_category_label"),
        Index("ix_reference_entity_category", "category"),
    )

    category: Mapped[ReferenceCategory] = mapped_column(
        SAEnum(ReferenceCategory, name="reference_category", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    weight: Mapped[Optional[int]] = mapped_column(Integer)
    props: Mapped[Optional[dict]] = mapped_column(JSONType)

    def __repr__(self) -> str:
        return f"<ReferenceEntity id={self.id} {self.category}={self.label!r}>"
