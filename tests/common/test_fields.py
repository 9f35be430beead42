from types import SimpleNamespace

from pydantic import BaseModel

from personcore.common.fields import clean, get_field, provided_fields


class _Payload(BaseModel):
    name: str | None = None
    sex: str | None = None


def test_get_field_mapping_and_attrs():
    assert get_field({"a": 1}, "a") == 1
    assert get_field({"a": 1}, "b", "x") == "x"
    assert get_field(SimpleNamespace(a=2), "a") == 2
    assert get_field(_Payload(name="Ana"), "name") == "Ana"


def test_provided_fields_tracks_what_was_sent():
    assert provided_fields(None) == set()
    assert provided_fields({"name": None, "sex": "Male"}) == {"name", "sex"}
    # pydantic: explicit None counts as sent, defaults do not
    assert provided_fields(_Payload(name=None)) == {"name"}


def test_clean():
    assert clean("  Ana ") == "Ana"
    assert clean("   ") is None
    assert clean(None) is None
    assert clean(0) == 0
