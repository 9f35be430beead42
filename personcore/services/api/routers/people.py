# personcore/services/api/routers/people.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from personcore.common.settings import get_settings
from personcore.services.api.deps import get_person_reader, get_person_writer
from personcore.services.people.reader import PersonReader
from personcore.services.people.writer import PersonAggregateWriter
from personcore.services.schemas.people import PersonListItem, PersonRead, PersonSubmission

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/people", tags=["people"])


@router.get("", response_model=List[PersonListItem])
def search_people(
    q: str = Query("", description="Case-insensitive substring on name"),
    limit: Optional[int] = Query(None, ge=1, le=cfg.people.index_limit_max),
    reader: PersonReader = Depends(get_person_reader),
) -> List[PersonListItem]:
    return reader.index(q, limit=limit or cfg.people.index_limit)


@router.post("", response_model=PersonRead, status_code=HTTPStatus.CREATED)
def store_person(
    payload: PersonSubmission,
    writer: PersonAggregateWriter = Depends(get_person_writer),
) -> PersonRead:
    # an id in the body is ignored on create; updates go through PUT
    return writer.store(payload)


@router.get("/{person_id}", response_model=PersonRead)
def get_person(
    person_id: str = Path(..., max_length=26),
    reader: PersonReader = Depends(get_person_reader),
) -> PersonRead:
    person = reader.show(person_id)
    if person is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Person not found")
    return person


@router.put("/{person_id}", response_model=PersonRead)
def update_person(
    payload: PersonSubmission,
    person_id: str = Path(..., max_length=26),
    writer: PersonAggregateWriter = Depends(get_person_writer),
) -> PersonRead:
    return writer.update(person_id, payload)
