"""Tests for `dynrec.core.codec` record ↔ JSON conversion."""

import logging

import pytest

from dynrec.core import descriptors as d
from dynrec.core.codec import of_json, of_json_exn, to_json
from dynrec.core.errors import (
    DecodeFailure,
    UndefinedFieldAccess,
    UndeserializableOpaqueValue,
    UnsealedLayoutAllocation,
)
from dynrec.core.layout import declare
from dynrec.core.result import Err, Ok
from dynrec.core.util import declare2, layout_type


def _person():
    return declare2(name="person", f1_name="name", f1_type=d.STRING, f2_name="age", f2_type=d.INT)


def test_person_scenario_encode_and_decode() -> None:
    person, name, age = _person()
    r = person.make()
    r.set(name, "Ada")
    r.set(age, 30)

    encoded = to_json(r)

    assert encoded == {"name": "Ada", "age": 30}
    assert list(encoded) == ["name", "age"]
    res = of_json(person, encoded)
    assert isinstance(res, Ok)
    assert res.value.get(name) == "Ada"
    assert res.value.get(age) == 30


def test_encode_omits_unset_fields_in_declaration_order() -> None:
    person, name, age = _person()
    r = person.make()
    r.set(age, 30)

    assert to_json(r) == {"age": 30}
    r.set(name, "Ada")
    assert list(to_json(r)) == ["name", "age"]


def test_decode_missing_field_leaves_it_unset() -> None:
    person, name, age = _person()

    r = of_json(person, {"name": "Ada"}).unwrap()

    assert r.get(name) == "Ada"
    with pytest.raises(UndefinedFieldAccess):
        r.get(age)


def test_decode_bad_value_names_the_field() -> None:
    person, _, _ = _person()

    res = of_json(person, {"name": 42})

    assert isinstance(res, Err)
    assert res.error.startswith("name: ")
    assert "string" in res.error


def test_decode_reports_first_failing_field_in_declaration_order() -> None:
    person, _, _ = _person()

    res = of_json(person, {"age": "old", "name": 42})

    assert isinstance(res, Err) and res.error.startswith("name: ")


@pytest.mark.parametrize("bad", [[], "Ada", 3, None])
def test_decode_requires_json_object(bad) -> None:
    person, _, _ = _person()

    res = of_json(person, bad)

    assert isinstance(res, Err)
    assert res.error.startswith("person: expected a JSON object")


def test_decode_ignores_unknown_keys(caplog) -> None:
    person, name, age = _person()

    with caplog.at_level(logging.DEBUG, logger="dynrec.core.codec"):
        r = of_json(person, {"name": "Ada", "email": "ada@example.org"}).unwrap()

    assert r.get(name) == "Ada"
    assert r.is_set(age) is False
    assert "email" in caplog.text


def test_of_json_exn_raises_decode_failure() -> None:
    person, _, _ = _person()

    with pytest.raises(DecodeFailure, match="^name: "):
        of_json_exn(person, {"name": 42})


def test_decode_against_unsealed_layout_fails() -> None:
    draft = declare("draft")
    draft.field("x", d.INT)

    with pytest.raises(UnsealedLayoutAllocation):
        of_json(draft, {"x": 1})


def test_opaque_field_propagates_undeserializable() -> None:
    job = declare("job")
    failure = job.field("failure", d.EXN)
    job.seal()
    r = job.make()
    r.set(failure, KeyError("k"))

    encoded = to_json(r)

    assert encoded == {"failure": "KeyError('k')"}
    with pytest.raises(UndeserializableOpaqueValue):
        of_json(job, encoded)
    # an absent opaque field is simply left unset
    assert of_json(job, {}).unwrap().is_set(failure) is False


def test_view_field_scenario() -> None:
    account = declare("account")
    balance = account.field(
        "balance",
        d.view(
            name="positive",
            read=lambda n: Ok(n) if n > 0 else Err("must be positive"),
            write=lambda n: n,
            base=d.INT,
        ),
    )
    account.seal()

    assert of_json(account, {"balance": 5}).unwrap().get(balance) == 5
    assert of_json(account, {"balance": -1}) == Err("balance: must be positive")


def test_nested_records_through_layout_type() -> None:
    person, name, age = _person()
    team = declare("team")
    members = team.field("members", d.list_of(layout_type(person)))
    team.seal()
    ada = person.make()
    ada.set(name, "Ada")
    t = team.make()
    t.set(members, [ada])

    encoded = to_json(t)

    assert encoded == {"members": [{"name": "Ada"}]}
    back = of_json(team, encoded).unwrap()
    assert back.get(members) == [ada]
    assert of_json(team, {"members": [{"age": "x"}]}) == Err(
        "members: age: expected a JSON integer, got string"
    )
