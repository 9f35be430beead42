from __future__ import annotations
from typing import Dict, Protocol

class CardIdentityPort(Protocol):
    """Identity-card collaborator (owned by the card module)."""
    def save_card_identity(self, owner_id: str, type_tag: str, value: str) -> None: ...
    def get_card_identities(self, owner_id: str) -> Dict[str, str]: ...
