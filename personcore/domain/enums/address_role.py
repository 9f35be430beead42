from __future__ import annotations
from enum import StrEnum

class AddressRole(StrEnum):
    KTP = "KTP"              # legal (ID-card) address
    RESIDENCE = "RESIDENCE"  # current living address
