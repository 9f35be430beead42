# personcore/common/naming/ulid.py
from __future__ import annotations

import secrets
import time
from typing import Optional

# Crockford base32: no I, L, O, U
CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ULID_LENGTH = 26

_TIME_BITS = 48
_RANDOM_BITS = 80
_MAX_TIMESTAMP = (1 << _TIME_BITS) - 1


def new_ulid(timestamp_ms: Optional[int] = None) -> str:
    """
    Generate a 26-char, lexicographically sortable identifier:
      - 48 bits of unix time in milliseconds (most significant)
      - 80 bits from `secrets`

    IDs created in later milliseconds always sort after earlier ones.
    Within the same millisecond ordering is random.
    """
    ts = int(time.time() * 1000) if timestamp_ms is None else int(timestamp_ms)
    if ts < 0 or ts > _MAX_TIMESTAMP:
        raise ValueError("timestamp_ms out of range for a ULID")
    value = (ts << _RANDOM_BITS) | secrets.randbits(_RANDOM_BITS)
    return _encode(value)


def _encode(value: int) -> str:
    chars = []
    for _ in range(ULID_LENGTH):
        chars.append(CROCKFORD_ALPHABET[value & 0x1F])
        value >>= 5
    return "".join(reversed(chars))


def is_ulid(text: object) -> bool:
    """True for a canonical (upper-case) 26-char ULID string."""
    if not isinstance(text, str) or len(text) != ULID_LENGTH:
        return False
    # 128 bits in 130: first char carries only 3 bits
    if text[0] > "7":
        return False
    return all(c in CROCKFORD_ALPHABET for c in text)


def ulid_timestamp_ms(text: str) -> int:
    """Decode the millisecond timestamp embedded in a ULID."""
    if not is_ulid(text):
        raise ValueError(f"not a ULID: {text!r}")
    value = 0
    for c in text:
        value = (value << 5) | CROCKFORD_ALPHABET.index(c)
    return value >> _RANDOM_BITS
