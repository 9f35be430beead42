# tests/database/test_people_repo.py
from datetime import date

from personcore.database.repos.people_repo import SqlAlchemyPeopleRepo
from personcore.domain.enums import Sex


def test_repo_create_get_update(db):
    repo = SqlAlchemyPeopleRepo(db)

    # create (unknown keys ignored)
    p = repo.create({"name": "Alice Smith", "sex": Sex.Female, "dob": date(1990, 1, 2), "bogus": 1})
    assert p.id is not None

    got = repo.get(p.id)
    assert got and got.name == "Alice Smith"
    assert repo.get_for_update(p.id).id == p.id

    # update touches only the given fields
    repo.update(p, {"pob": "Bandung"})
    db.commit()
    db.expire_all()
    got = repo.get(p.id)
    assert got.pob == "Bandung"
    assert got.name == "Alice Smith"
    assert got.sex is Sex.Female


def test_repo_get_missing(db):
    repo = SqlAlchemyPeopleRepo(db)
    assert repo.get("01ARZ3NDEKTSV4RRFFQ69G5FAV") is None
    assert repo.get_for_update("01ARZ3NDEKTSV4RRFFQ69G5FAV") is None


def test_repo_search(db):
    repo = SqlAlchemyPeopleRepo(db)
    for name in ("Charlie", "alice", "Bob", "Alicia Keys"):
        repo.create({"name": name})
    db.commit()

    assert {p.name for p in repo.search("ALI")} == {"Alicia Keys", "alice"}
    assert len(repo.search("", limit=2)) == 2
    assert repo.search("zzz") == []
