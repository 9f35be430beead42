# personcore/database/core/service_object.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

from personcore.common.naming.ulid import new_ulid, ULID_LENGTH

# JSONB on Postgres, plain JSON everywhere else (tests run on SQLite)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class ServiceObject:
    """
    Mixin providing common columns for persisted models.
    Use with multiple inheritance: `class MyModel(ServiceObject, Base): ...`
    """
    __abstract__ = True

    @declared_attr
    def id(cls) -> Mapped[str]:
        # ULID generated application-side; never reassigned
        return mapped_column(
            String(ULID_LENGTH),
            primary_key=True,
            default=new_ulid,
        )

    @declared_attr
    def date_created(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
        )

    @declared_attr
    def last_updated(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
        )

    @declared_attr
    def data_origin(cls) -> Mapped[Optional[str]]:
        return mapped_column(Text, nullable=True)

    @declared_attr
    def meta_data(cls) -> Mapped[Optional[dict]]:
        return mapped_column(JSONType, nullable=True)
