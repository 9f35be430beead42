from personcore.services.schemas.people import (
    AddressBlock,
    AddressSubmission,
    AddressRead,
    AddressPairRead,
    PersonSubmission,
    PersonListItem,
    PersonRead,
)
from personcore.services.schemas.family import (
    FamilyRelationshipSubmission,
    FamilyRelationshipRead,
)
from personcore.services.schemas.references import (
    ReferenceCreate,
    ReferenceLabelRead,
    ReferenceRead,
)
__all__ = [
    "AddressBlock",
    "AddressSubmission",
    "AddressRead",
    "AddressPairRead",
    "PersonSubmission",
    "PersonListItem",
    "PersonRead",
    "FamilyRelationshipSubmission",
    "FamilyRelationshipRead",
    "ReferenceCreate",
    "ReferenceLabelRead",
    "ReferenceRead",
]
