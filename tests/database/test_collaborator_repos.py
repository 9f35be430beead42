# tests/database/test_collaborator_repos.py
from personcore.database.repos.address_repo import SqlAlchemyAddressRepo
from personcore.database.repos.card_identity_repo import SqlAlchemyCardIdentityRepo
from personcore.domain.enums import AddressRole


def test_address_save_overwrites_role(db):
    repo = SqlAlchemyAddressRepo(db)
    first = repo.save_address("P1", AddressRole.KTP, {"name": "Jl. A", "rt": "01"})
    second = repo.save_address("P1", AddressRole.KTP, {"name": "Jl. B"})
    repo.save_address("P1", AddressRole.RESIDENCE, {"name": "Jl. C"})
    db.commit()

    assert first.id == second.id
    got = repo.get_addresses("P1")
    assert set(got) == {AddressRole.KTP, AddressRole.RESIDENCE}
    assert got[AddressRole.KTP].name == "Jl. B"
    assert got[AddressRole.KTP].payload == {"name": "Jl. B"}
    assert repo.get_addresses("P2") == {}


def test_address_owner_type_scopes_rows(db):
    SqlAlchemyAddressRepo(db, owner_type="Company").save_address("X", AddressRole.KTP, {"name": "HQ"})
    db.commit()
    assert SqlAlchemyAddressRepo(db).get_addresses("X") == {}


def test_card_identity_upsert(db):
    repo = SqlAlchemyCardIdentityRepo(db)
    repo.save_card_identity("P1", "nik", "3201")
    repo.save_card_identity("P1", "nik", "3202")
    repo.save_card_identity("P1", "passport", "A123")
    db.commit()
    assert repo.get_card_identities("P1") == {"nik": "3202", "passport": "A123"}
