# tests/services/mappers/test_people_mapper.py
from datetime import date

import pytest

from personcore.database.models import Person
from personcore.domain.dataclasses.reference import ReferenceLabel
from personcore.domain.enums import Sex
from personcore.services.mappers.people import age_on, to_list_item, to_person_read


@pytest.mark.parametrize(
    "dob, today, expected",
    [
        (date(1990, 1, 15), date(2020, 1, 14), 29),
        (date(1990, 1, 15), date(2020, 1, 15), 30),
        (date(2000, 2, 29), date(2021, 2, 28), 20),
        (date(2000, 2, 29), date(2021, 3, 1), 21),
        (date(2030, 1, 1), date(2020, 1, 1), 0),
        (None, date(2020, 1, 1), None),
    ],
)
def test_age_on(dob, today, expected):
    assert age_on(dob, today) == expected


def _person(**kw):
    base = dict(id="01HZZZZZZZZZZZZZZZZZZZZZZZ", name="Ani", sex=Sex.Female, dob=date(1990, 1, 15))
    base.update(kw)
    return Person(**base)


def test_to_person_read_labels_and_card_filter():
    row = _person(religion_id="R1", last_education_id="E404", phones=None, props=None)
    out = to_person_read(
        row,
        today=date(2020, 6, 1),
        labels={"religion_id": ReferenceLabel(id="R1", label="Islam", category="Religion")},
        addresses={},
        cards={"nik": "3201", "loyalty": "L-1", "passport": None},
        allowed_card_types=["nik", "passport"],
    )
    assert out.sex == "Female"
    assert out.age == 30
    assert out.religion.label == "Islam"
    # unresolved id is kept, label omitted
    assert out.last_education_id == "E404"
    assert out.last_education is None
    assert out.card_identity == {"nik": "3201"}
    assert out.phones == [] and out.props == {}
    assert out.address.ktp is None


def test_to_list_item():
    item = to_list_item(_person(pob="Bandung"))
    assert item.name == "Ani"
    assert item.sex == "Female"
    assert item.pob == "Bandung"
