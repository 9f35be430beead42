# personcore/services/api/routers/family_relationships.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from personcore.common.settings import get_settings
from personcore.services.api.deps import get_family_reader
from personcore.services.people.reader import FamilyRelationshipReader
from personcore.services.schemas.family import FamilyRelationshipRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/family-relationships", tags=["family-relationships"])


@router.get("", response_model=List[FamilyRelationshipRead])
def list_family_relationships(
    people_id: Optional[str] = Query(None, description="Only contacts of this person"),
    limit: int = Query(100, ge=1, le=500),
    reader: FamilyRelationshipReader = Depends(get_family_reader),
) -> List[FamilyRelationshipRead]:
    return reader.index(people_id, limit=limit)


@router.get("/{relationship_id}", response_model=FamilyRelationshipRead)
def get_family_relationship(
    relationship_id: str,
    reader: FamilyRelationshipReader = Depends(get_family_reader),
) -> FamilyRelationshipRead:
    obj = reader.show(relationship_id)
    if obj is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Family relationship not found")
    return obj
