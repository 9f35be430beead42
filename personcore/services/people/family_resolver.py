# personcore/services/people/family_resolver.py
from __future__ import annotations

from typing import Any, Optional

from personcore.common.fields import clean, get_field, provided_fields
from personcore.domain.dataclasses.family import FamilyContactRecord
from personcore.domain.enums import ReferenceCategory, Sex
from personcore.domain.errors import AmbiguousRoleError, ValidationError
from personcore.domain.policies.person_normalizer import enum_value
from personcore.domain.ports.reference import ReferenceStorePort
from personcore.services.people.links import LinkRegistry

FAMILY_RECORD_FIELDS = ("name", "phone", "sex")
_PREFIX = "family_relationship"


def _has_record_data(submission: Any) -> bool:
    return any(clean(get_field(submission, f)) is not None for f in FAMILY_RECORD_FIELDS)


class FamilyContactResolver:
    """
    Turns the nested family-contact block into a FamilyContactRecord owned by
    the person being saved.

    Role input is either `family_role_id` (existing reference) or `family_role`
    (payload creating a new FamilyRole reference), never both. When the block
    carries record data, exactly one of them is required.
    """

    def __init__(self, references: ReferenceStorePort, links: LinkRegistry) -> None:
        self.references = references
        self.links = links

    def validate(self, submission: Any) -> None:
        """Input checks only; safe to call before any write begins."""
        if submission is None:
            return
        role_id = clean(get_field(submission, "family_role_id"))
        role_payload = get_field(submission, "family_role")

        if role_id and role_payload is not None:
            raise AmbiguousRoleError(
                "family_role_id and family_role are mutually exclusive",
                {
                    f"{_PREFIX}.family_role_id": "cannot be combined with family_role",
                    f"{_PREFIX}.family_role": "cannot be combined with family_role_id",
                },
            )
        if not role_id and role_payload is None and _has_record_data(submission):
            raise AmbiguousRoleError(
                "A family contact needs either family_role_id or family_role",
                {f"{_PREFIX}.family_role_id": "required when family_role is absent"},
            )
        if role_payload is not None and not clean(get_field(role_payload, "name")):
            raise ValidationError.for_field(f"{_PREFIX}.family_role.name", "Family role name is required")

        if "sex" in provided_fields(submission):
            try:
                enum_value("sex", Sex, get_field(submission, "sex"))
            except ValidationError as ex:
                raise type(ex)(ex.message, {f"{_PREFIX}.sex": ex.message}) from ex

        ref_type = clean(get_field(submission, "reference_type"))
        ref_id = clean(get_field(submission, "reference_id"))
        if bool(ref_type) != bool(ref_id):
            raise ValidationError.for_field(
                f"{_PREFIX}.reference_type", "reference_type and reference_id must be given together"
            )
        if ref_type and not self.links.is_registered(ref_type):
            raise ValidationError.for_field(
                f"{_PREFIX}.reference_type",
                f"Unknown reference_type {ref_type!r}; expected one of {self.links.type_tags}",
            )

    def resolve(self, submission: Any, person_id: str) -> Optional[FamilyContactRecord]:
        """
        None when there is nothing to record. Creates the nested role first
        when one is given. Any inline `people_id` is ignored.
        """
        if submission is None:
            return None
        self.validate(submission)

        role_id = clean(get_field(submission, "family_role_id"))
        role_payload = get_field(submission, "family_role")
        if not role_id and role_payload is None and not _has_record_data(submission):
            return None

        provided = provided_fields(submission)
        values = {
            key: clean(get_field(submission, key))
            for key in ("name", "phone", "reference_type", "reference_id")
            if key in provided
        }
        if "sex" in provided:
            values["sex"] = enum_value("sex", Sex, get_field(submission, "sex"))

        role_created = False
        if role_payload is not None:
            label = self.references.create(
                ReferenceCategory.FamilyRole,
                clean(get_field(role_payload, "name")),
                weight=get_field(role_payload, "weight"),
            )
            role_id = label.id
            role_created = True

        return FamilyContactRecord(
            person_id=person_id,
            family_role_id=role_id,
            values=values,
            role_created=role_created,
        )
