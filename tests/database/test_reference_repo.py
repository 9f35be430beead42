# tests/database/test_reference_repo.py
import pytest

from personcore.database.repos.reference_repo import SqlAlchemyReferenceRepo
from personcore.domain.enums import ReferenceCategory


def test_get_is_scoped_to_category(db, refs):
    repo = SqlAlchemyReferenceRepo(db)
    islam = repo.get(ReferenceCategory.Religion, refs["Islam"])
    assert islam.label == "Islam"
    assert islam.category == "Religion"
    # same id, wrong category
    assert repo.get(ReferenceCategory.Education, refs["Islam"]) is None
    assert repo.get(ReferenceCategory.Religion, "") is None


def test_list_orders_by_weight_then_label(db, refs):
    repo = SqlAlchemyReferenceRepo(db)
    repo.create(ReferenceCategory.Religion, "Buddha")  # no weight -> last
    db.commit()
    assert [r.label for r in repo.list(ReferenceCategory.Religion)] == ["Islam", "Katolik", "Buddha"]


def test_create_returns_existing_label(db, refs):
    repo = SqlAlchemyReferenceRepo(db)
    again = repo.create(ReferenceCategory.FamilyRole, "  Ibu ")
    assert again.id == refs["Ibu"]

    new = repo.create(ReferenceCategory.FamilyRole, "Ayah", weight=3)
    assert new.id != refs["Ibu"]
    assert new.weight == 3


def test_create_requires_label(db):
    with pytest.raises(ValueError):
        SqlAlchemyReferenceRepo(db).create(ReferenceCategory.FamilyRole, "  ")
