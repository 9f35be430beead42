# personcore/domain/dataclasses/address.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from personcore.domain.enums import AddressRole


@dataclass(frozen=True)
class AddressPair:
    """Legal (KTP) and residence addresses; None means no address for that role."""
    legal: Optional[Dict[str, Any]] = None
    residence: Optional[Dict[str, Any]] = None

    def by_role(self) -> Iterator[Tuple[AddressRole, Dict[str, Any]]]:
        if self.legal is not None:
            yield AddressRole.KTP, self.legal
        if self.residence is not None:
            yield AddressRole.RESIDENCE, self.residence


@dataclass(frozen=True)
class AddressRecord:
    id: str
    owner_id: str
    role: AddressRole
    name: Optional[str]
    payload: Dict[str, Any]
