from __future__ import annotations
from enum import StrEnum

class Sex(StrEnum):
    Male = "Male"
    Female = "Female"
