from personcore.domain.enums.address_role import AddressRole
from personcore.domain.enums.blood_type import BloodType
from personcore.domain.enums.reference_category import ReferenceCategory
from personcore.domain.enums.sex import Sex
__all__ = [
    "AddressRole",
    "BloodType",
    "ReferenceCategory",
    "Sex",
]
