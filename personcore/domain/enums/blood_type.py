from __future__ import annotations
from enum import StrEnum

class BloodType(StrEnum):
    A = "A"
    A_POS = "A+"
    A_NEG = "A-"
    B = "B"
    B_POS = "B+"
    B_NEG = "B-"
    O = "O"
    O_POS = "O+"
    O_NEG = "O-"
    AB = "AB"
    AB_POS = "AB+"
    AB_NEG = "AB-"
