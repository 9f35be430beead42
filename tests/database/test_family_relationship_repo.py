# tests/database/test_family_relationship_repo.py
from personcore.database.models import Person
from personcore.database.repos.family_relationship_repo import SqlAlchemyFamilyRelationshipRepo
from personcore.domain.dataclasses.family import FamilyContactRecord
from personcore.domain.enums import Sex


def _person(db, name="Budi"):
    p = Person(name=name)
    db.add(p)
    db.flush()
    return p


def test_upsert_creates_then_updates_in_place(db):
    p = _person(db)
    repo = SqlAlchemyFamilyRelationshipRepo(db)

    row = repo.upsert(FamilyContactRecord(person_id=p.id, family_role_id="R1", values={"name": "Ani", "sex": Sex.Female}))
    again = repo.upsert(FamilyContactRecord(person_id=p.id, values={"phone": "0811"}))
    db.commit()

    assert again.id == row.id
    assert again.name == "Ani"          # untouched
    assert again.phone == "0811"
    assert again.family_role_id == "R1"
    assert len(repo.list(people_id=p.id)) == 1


def test_upsert_owner_is_record_person(db):
    p = _person(db)
    other = _person(db, "Other")
    repo = SqlAlchemyFamilyRelationshipRepo(db)
    rec = FamilyContactRecord(person_id=p.id, values={"name": "Ani", "people_id": other.id})
    row = repo.upsert(rec)
    assert row.people_id == p.id


def test_soft_delete_hides_row(db):
    p = _person(db)
    repo = SqlAlchemyFamilyRelationshipRepo(db)
    row = repo.upsert(FamilyContactRecord(person_id=p.id, values={"name": "Ani"}))
    repo.soft_delete(row)
    db.commit()

    assert row.is_deleted
    assert repo.active_for_person(p.id) is None
    assert repo.get(row.id) is None
    assert repo.get(row.id, include_deleted=True).id == row.id
    assert repo.list() == []

    # a later upsert starts a new active contact
    fresh = repo.upsert(FamilyContactRecord(person_id=p.id, values={"name": "Ina"}))
    assert fresh.id != row.id
