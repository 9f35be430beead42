# personcore/domain/policies/person_normalizer.py
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from personcore.common.fields import clean as _clean, get_field as _get, provided_fields as _provided
from personcore.domain.dataclasses.person import NormalizedPerson
from personcore.domain.enums import BloodType, Sex
from personcore.domain.errors import InvalidDateError, InvalidEnumError, MissingNameError, ValidationError

# Keep these small and explicit so tests are deterministic.
DOB_FORMATS = (
    (re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),  # 1990-01-15
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%d-%m-%Y"),  # 15-01-1990
)
PROP_PHONE_KEYS = ("phone_1", "phone_2")

NAME_MAX_LENGTH = 255
REFERENCE_ID_MAX_LENGTH = 64

# Column widths on the person row
_MAX_LENGTHS = {
    "name": NAME_MAX_LENGTH,
    "first_name": NAME_MAX_LENGTH,
    "last_name": NAME_MAX_LENGTH,
    "uuid": 36,
    "pob": 255,
    "mother_name": 255,
    "father_name": 255,
    "religion_id": REFERENCE_ID_MAX_LENGTH,
    "last_education_id": REFERENCE_ID_MAX_LENGTH,
    "marital_status_id": REFERENCE_ID_MAX_LENGTH,
    "country_id": REFERENCE_ID_MAX_LENGTH,
}

# Copied as-is (strings stripped, blanks -> None)
_PLAIN_FIELDS = (
    "uuid",
    "pob",
    "mother_name",
    "father_name",
    "total_children",
    "is_nationality",
    "religion_id",
    "last_education_id",
    "marital_status_id",
    "country_id",
)


def parse_dob(value: Any) -> date:
    """
    Accept `YYYY-MM-DD` or `DD-MM-YYYY` (or a date) and return the one calendar
    date it denotes. Anything else, including impossible dates, is rejected.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _clean(value) if isinstance(value, str) else None
    if not text:
        raise InvalidDateError.for_field("dob", f"Unrecognised date of birth: {value!r}")

    parsed: List[date] = []
    for pattern, fmt in DOB_FORMATS:
        if not pattern.match(text):
            continue
        try:
            parsed.append(datetime.strptime(text, fmt).date())
        except ValueError:
            continue
    if len(set(parsed)) != 1:
        raise InvalidDateError.for_field(
            "dob", f"Date of birth must be YYYY-MM-DD or DD-MM-YYYY, got {text!r}"
        )
    return parsed[0]


def enum_value(field: str, enum_cls, value: Any):
    value = _clean(value)
    if value is None:
        return None
    allowed = [m.value for m in enum_cls]
    if value not in allowed:  # exact, case-sensitive
        raise InvalidEnumError.for_field(field, f"{field} must be one of {allowed}, got {value!r}")
    return enum_cls(value)


def check_lengths(values: Mapping[str, Any]) -> None:
    errors = {
        key: f"at most {limit} characters"
        for key, limit in _MAX_LENGTHS.items()
        if isinstance(values.get(key), str) and len(values[key]) > limit
    }
    if errors:
        raise ValidationError("Submitted values are too long", errors)


def merge_phones(phones: Optional[Iterable[Any]], props: Optional[Mapping[str, Any]]) -> Optional[List[str]]:
    """
    Explicit list wins; otherwise fall back to props.phone_1 / props.phone_2.
    Order kept, blanks dropped, duplicates preserved. None if neither source exists.
    """
    if phones is not None:
        source = list(phones)
    elif props and any(k in props for k in PROP_PHONE_KEYS):
        source = [props.get(k) for k in PROP_PHONE_KEYS]
    else:
        return None
    out: List[str] = []
    for p in source:
        p = _clean(None if p is None else str(p))
        if p:
            out.append(p)
    return out


class PersonNormalizer:
    """
    Turns an inbound submission (pydantic model or plain mapping) into a
    NormalizedPerson, enforcing the mandatory-field contract.

    Only the name is mandatory. Everything else is validated when supplied.
    With `partial=True` (updates) absent fields stay absent, so the writer
    leaves them unchanged.
    """

    def normalize(self, submission: Any, *, partial: bool = False) -> NormalizedPerson:
        provided = _provided(submission)
        values: dict = {}

        # 1) name
        name = _clean(_get(submission, "name"))
        first = _clean(_get(submission, "first_name"))
        last = _clean(_get(submission, "last_name"))
        if name:
            values["name"] = name
        elif first and last:
            values["name"] = f"{first} {last}"
        elif partial and "name" not in provided:
            pass  # name untouched on update
        else:
            raise MissingNameError(
                "Either name or both first_name and last_name are required",
                {"name": "required when first_name and last_name are not both given"},
            )
        for key, v in (("first_name", first), ("last_name", last)):
            if key in provided:
                values[key] = v

        # 2) date of birth
        if "dob" in provided:
            raw = _get(submission, "dob")
            values["dob"] = None if _clean(raw) is None else parse_dob(raw)

        # 3) enums
        if "sex" in provided:
            values["sex"] = enum_value("sex", Sex, _get(submission, "sex"))
        if "blood_type" in provided:
            values["blood_type"] = enum_value("blood_type", BloodType, _get(submission, "blood_type"))

        # 4) phones + property bag
        props = _get(submission, "props") if "props" in provided else None
        if "props" in provided:
            values["props"] = dict(props or {})
        phones = merge_phones(_get(submission, "phones") if "phones" in provided else None, props)
        if phones is not None:
            values["phones"] = phones
        elif not partial:
            values["phones"] = []

        for key in _PLAIN_FIELDS:
            if key in provided:
                values[key] = _clean(_get(submission, key))

        check_lengths(values)
        return NormalizedPerson(values=values, id=_clean(_get(submission, "id")))

    def rederive_name(
        self, normalized: NormalizedPerson, stored_first: Optional[str], stored_last: Optional[str]
    ) -> NormalizedPerson:
        """
        Update path: when only name parts were sent, rebuild `name` from the sent
        part(s) plus the stored other part. No-op if `name` was sent or either
        part ends up missing.
        """
        if normalized.has("name"):
            return normalized
        if not (normalized.has("first_name") or normalized.has("last_name")):
            return normalized
        first = normalized.get("first_name") if normalized.has("first_name") else stored_first
        last = normalized.get("last_name") if normalized.has("last_name") else stored_last
        if first and last:
            normalized.values["name"] = f"{first} {last}"
            check_lengths(normalized.values)
        return normalized
