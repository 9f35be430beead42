# tests/services/people/test_family_resolver.py
from __future__ import annotations

import pytest

from personcore.database.repos.reference_repo import SqlAlchemyReferenceRepo
from personcore.domain.enums import ReferenceCategory, Sex
from personcore.domain.errors import AmbiguousRoleError, InvalidEnumError, ValidationError
from personcore.services.people.family_resolver import FamilyContactResolver
from personcore.services.people.links import default_link_registry
from personcore.services.schemas.family import FamilyRelationshipSubmission

PERSON_ID = "01HZZZZZZZZZZZZZZZZZZZZZZZ"


@pytest.fixture()
def resolver(db):
    return FamilyContactResolver(SqlAlchemyReferenceRepo(db), default_link_registry())


def test_both_role_inputs_is_ambiguous(resolver, refs):
    with pytest.raises(AmbiguousRoleError) as ei:
        resolver.validate({"name": "Ani", "family_role_id": refs["Ibu"], "family_role": {"name": "Ibu"}})
    assert "family_relationship.family_role_id" in ei.value.errors


def test_record_data_without_role_is_ambiguous(resolver):
    with pytest.raises(AmbiguousRoleError):
        resolver.validate({"name": "Ani", "phone": "0811"})


def test_empty_block_is_fine(resolver):
    resolver.validate(None)
    resolver.validate({})
    assert resolver.resolve({}, PERSON_ID) is None
    assert resolver.resolve(None, PERSON_ID) is None


def test_role_name_required(resolver):
    with pytest.raises(ValidationError) as ei:
        resolver.validate({"name": "Ani", "family_role": {"name": " "}})
    assert "family_relationship.family_role.name" in ei.value.errors


def test_bad_sex_is_prefixed(resolver, refs):
    with pytest.raises(InvalidEnumError) as ei:
        resolver.validate({"name": "Ani", "family_role_id": refs["Ibu"], "sex": "female"})
    assert "family_relationship.sex" in ei.value.errors


def test_link_must_be_complete_and_registered(resolver, refs):
    with pytest.raises(ValidationError):
        resolver.validate({"family_role_id": refs["Ibu"], "reference_type": "Person"})
    with pytest.raises(ValidationError) as ei:
        resolver.validate({"family_role_id": refs["Ibu"], "reference_type": "User", "reference_id": "1"})
    assert "family_relationship.reference_type" in ei.value.errors


def test_resolve_with_existing_role(resolver, refs):
    rec = resolver.resolve(
        {"name": " Ani ", "sex": "Female", "family_role_id": refs["Ibu"], "people_id": "SOMEONE_ELSE"},
        PERSON_ID,
    )
    assert rec.person_id == PERSON_ID
    assert rec.family_role_id == refs["Ibu"]
    assert rec.values == {"name": "Ani", "sex": Sex.Female}
    assert rec.role_created is False
    assert rec.as_row()["people_id"] == PERSON_ID


def test_resolve_creates_nested_role(db, resolver):
    sub = FamilyRelationshipSubmission.model_validate(
        {"name": "Joko", "phone": "0812", "family_role": {"name": "Ayah", "weight": 2}}
    )
    rec = resolver.resolve(sub, PERSON_ID)
    assert rec.role_created is True
    created = SqlAlchemyReferenceRepo(db).get(ReferenceCategory.FamilyRole, rec.family_role_id)
    assert created.label == "Ayah"
    assert created.weight == 2
    assert rec.values == {"name": "Joko", "phone": "0812"}


def test_role_only_update_is_a_record(resolver, refs):
    rec = resolver.resolve({"family_role_id": refs["Ibu"]}, PERSON_ID)
    assert rec is not None
    assert rec.values == {}
