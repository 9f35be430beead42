# personcore/database/models/__init__.py

from personcore.database.core.main import Base
from personcore.database.models.reference import (
    ReferenceEntity,
)
from personcore.database.models.person import (
    Person,
    FamilyRelationship,
)
from personcore.database.models.address import (
    Address,
)
from personcore.database.models.card_identity import (
    CardIdentity,
)

__all__ = [
    "Base",
    "ReferenceEntity",
    "Person",
    "FamilyRelationship",
    "Address",
    "CardIdentity",
]
