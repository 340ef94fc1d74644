from __future__ import annotations

import sqlite3

import pytest

from liteorm import describe
from liteorm.domain import codec
from sample_models import Address, Profile, Sensor, User


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.row_factory = sqlite3.Row
    yield connection
    connection.close()


def _attr(model, name):
    return describe(model).attribute(name)


def test_literal_renders_python_values():
    assert codec.literal("bob") == "'bob'"
    assert codec.literal(True) == "1"
    assert codec.literal(False) == "0"
    assert codec.literal(None) == "null"
    assert codec.literal(42) == "42"
    assert codec.literal(2.5) == "2.5"
    assert codec.literal([1, 2, 3]) == "1, 2, 3"
    assert codec.literal(("a", "b")) == "'a', 'b'"


def test_quote_doubles_embedded_single_quotes():
    assert codec.quote("O'Brien") == "'O''Brien'"


def test_encode_by_kind():
    user = User(name="user1", age=18, vip=True, labels=["x", "y"])

    assert codec.encode(user, _attr(User, "name")) == "'user1'"
    assert codec.encode(user, _attr(User, "age")) == "18"
    assert codec.encode(user, _attr(User, "vip")) == "1"
    assert codec.encode(user, _attr(User, "labels")) == """'["x","y"]'"""
    assert codec.encode(user, _attr(User, "uid")) == "null"


def test_encode_real_and_nested_json():
    profile = Profile(score=1.5, address=Address(city="Wien", zip_code="1010"))

    assert codec.encode(profile, _attr(Profile, "score")) == "1.5"
    assert codec.encode(profile, _attr(Profile, "address")) == (
        """'{"city":"Wien","zip_code":"1010"}'"""
    )
    assert codec.encode(profile, _attr(Profile, "active")) == "1"


def test_decode_by_kind(conn):
    row = conn.execute(
        "select 7 as age, 'bob' as name, 0 as vip, '[\"a\"]' as labels, null as uid"
    ).fetchone()

    assert codec.decode(row, _attr(User, "age")) == 7
    assert codec.decode(row, _attr(User, "name")) == "bob"
    assert codec.decode(row, _attr(User, "vip")) is False
    assert codec.decode(row, _attr(User, "labels")) == ["a"]
    assert codec.decode(row, _attr(User, "uid")) is None


def test_decode_null_for_non_nullable_uses_default(conn):
    row = conn.execute("select null as level, null as nickname").fetchone()

    assert codec.decode(row, _attr(Profile, "level")) == 1
    assert codec.decode(row, _attr(Profile, "nickname")) == "anonymous"


def test_decode_json_into_nested_model(conn):
    row = conn.execute("""select '{"city":"Graz","zip_code":"8010"}' as address""").fetchone()

    assert codec.decode(row, _attr(Profile, "address")) == Address(city="Graz", zip_code="8010")


def test_materialize_full_row(conn):
    row = conn.execute(
        "select 3 as id, 10 as created_at, 11 as updated_at, 99 as uid, 'ann' as name, "
        "30 as age, 1 as vip, null as labels"
    ).fetchone()

    user = codec.materialize(User, row)

    assert user == User(
        id=3, created_at=10, updated_at=11, uid=99, name="ann", age=30, vip=True, labels=None
    )


def test_materialize_projection_leaves_other_attributes_blank(conn):
    row = conn.execute("select 'ann' as name, 30 as age").fetchone()

    user = codec.materialize(User, row, projection=("name", "age"))

    assert (user.name, user.age) == ("ann", 30)
    assert user.id == 0
    assert user.vip is None
    assert user.labels is None


def test_materialize_projection_fills_required_with_kind_zero(conn):
    row = conn.execute("select 'S-1' as code").fetchone()

    sensor = codec.materialize(Sensor, row, projection=["code"])

    assert sensor.code == "S-1"
    assert sensor.reading == 0.0


def test_materialize_keeps_ignored_attribute_default(conn):
    row = conn.execute("select 'nick' as nickname").fetchone()

    profile = codec.materialize(Profile, row, projection=["nickname"])

    assert profile.session_token is None
    assert profile.settings == {}


def test_decode_null_json_uses_declared_default(conn):
    row = conn.execute("select null as settings, null as address").fetchone()

    assert codec.decode(row, _attr(Profile, "settings")) == {}
    assert codec.decode(row, _attr(Profile, "address")) is None
