from __future__ import annotations
from typing import Any, Dict, Mapping, Protocol

from personcore.domain.dataclasses.address import AddressRecord
from personcore.domain.enums import AddressRole

class AddressPort(Protocol):
    """Address collaborator (owned by the regional module)."""
    def save_address(self, owner_id: str, role: AddressRole, payload: Mapping[str, Any]) -> AddressRecord: ...
    def get_addresses(self, owner_id: str) -> Dict[AddressRole, AddressRecord]: ...
