# personcore/database/repos/people_repo.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from personcore.database.models.person import Person as DBPerson
from personcore.domain.dataclasses.person import PERSON_SCALAR_FIELDS


class SqlAlchemyPeopleRepo:
    def __init__(self, session: Session) -> None:
        self.db = session

    # -------- People --------

    def get(self, person_id: str) -> Optional[DBPerson]:
        return self.db.get(DBPerson, person_id)

    def get_for_update(self, person_id: str) -> Optional[DBPerson]:
        """Row-locked read; concurrent writers on the same person serialize here."""
        stmt = select(DBPerson).where(DBPerson.id == person_id).with_for_update()
        return self.db.execute(stmt).scalars().first()

    def search(self, q: str, limit: int = 25) -> List[DBPerson]:
        q = (q or "").strip().lower()
        if not q:
            stmt = select(DBPerson).order_by(DBPerson.name.asc(), DBPerson.id.asc()).limit(limit)
        else:
            stmt = (
                select(DBPerson)
                .where(func.lower(DBPerson.name).like(f"%{q}%"))
                .order_by(DBPerson.name.asc(), DBPerson.id.asc())
                .limit(limit)
            )
        return self.db.execute(stmt).scalars().all()

    def create(self, values: Mapping[str, Any]) -> DBPerson:
        obj = DBPerson(**{k: v for k, v in values.items() if k in PERSON_SCALAR_FIELDS})
        self.db.add(obj)
        self.db.flush()  # ensure id
        return obj

    def update(self, obj: DBPerson, values: Mapping[str, Any]) -> DBPerson:
        """Apply only the supplied fields; everything else stays as stored."""
        for key, value in values.items():
            if key in PERSON_SCALAR_FIELDS:
                setattr(obj, key, value)
        self.db.flush()
        return obj
