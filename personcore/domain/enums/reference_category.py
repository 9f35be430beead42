from __future__ import annotations
from enum import StrEnum

class ReferenceCategory(StrEnum):
    Religion = "Religion"
    Education = "Education"
    MaritalStatus = "MaritalStatus"
    FamilyRole = "FamilyRole"
