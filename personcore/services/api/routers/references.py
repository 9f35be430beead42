# personcore/services/api/routers/references.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from personcore.common.settings import get_settings
from personcore.domain.enums import ReferenceCategory
from personcore.services.api.deps import get_reference_resolver
from personcore.services.people.reference_resolver import ReferenceResolver
from personcore.services.schemas.references import ReferenceRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/references", tags=["references"])


def _category_or_404(category: str) -> ReferenceCategory:
    try:
        return ReferenceCategory(category)
    except ValueError:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"Unknown reference category: {category}")


@router.get("/{category}", response_model=List[ReferenceRead])
def list_references(
    category: str,
    resolver: ReferenceResolver = Depends(get_reference_resolver),
) -> List[ReferenceRead]:
    cat = _category_or_404(category)
    return [
        ReferenceRead(id=r.id, label=r.label, category=r.category, weight=r.weight)
        for r in resolver.list(cat)
    ]


@router.get("/{category}/{reference_id}", response_model=ReferenceRead)
def get_reference(
    category: str,
    reference_id: str,
    resolver: ReferenceResolver = Depends(get_reference_resolver),
) -> ReferenceRead:
    r = resolver.resolve(_category_or_404(category), reference_id)
    if r is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Reference not found")
    return ReferenceRead(id=r.id, label=r.label, category=r.category, weight=r.weight)
