from __future__ import annotations

import json

import pytest

from typed_prefs.errors import PreferenceStoreError, PreferenceTypeError, PreferenceValueError
from typed_prefs.store.file import FileStore
from typed_prefs.store.memory import MemoryStore
from typed_prefs.values import PrefKind


def test_typed_reads_fall_back_to_default():
    store = MemoryStore()
    assert store.get_boolean("b", True) is True
    assert store.get_float("f", 1.5) == 1.5
    assert store.get_int("i", 7) == 7
    assert store.get_long("l", 8) == 8
    assert store.get_string("s", None) is None
    assert store.get_string_set("t", frozenset({"x"})) == {"x"}


def test_edits_are_invisible_until_commit():
    store = MemoryStore()
    editor = store.edit().put_int("a", 1).put_string("b", "x")
    assert not store.contains("a")
    editor.commit()
    assert store.get_all() == {"a": 1, "b": "x"}


def test_remove_cancels_pending_put_and_clear_runs_first():
    store = MemoryStore()
    store.edit().put_int("keep", 1).put_int("old", 2).commit()

    store.edit().put_int("gone", 3).remove("gone").commit()
    assert not store.contains("gone")

    store.edit().put_boolean("fresh", True).clear().commit()
    assert store.get_all() == {"fresh": True}


def test_store_read_kind_mismatch():
    store = MemoryStore("app_settings")
    store.edit().put_long("ts", 10).commit()
    with pytest.raises(PreferenceTypeError, match="holds a long"):
        store.get_int("ts", 0)


def test_editor_validates_ranges():
    store = MemoryStore()
    with pytest.raises(PreferenceValueError):
        store.edit().put_int("n", 2**31)
    store.edit().put_long("n", 2**31).commit()
    assert store.entries()["n"].kind is PrefKind.LONG


def test_file_store_persists_across_instances(tmp_path):
    store = FileStore("user", tmp_path)
    (
        store.edit()
        .put_boolean("flag", True)
        .put_float("ratio", 0.25)
        .put_int("count", 3)
        .put_long("seen", 2**40)
        .put_string("name", "ada")
        .put_string_set("tags", frozenset({"b", "a"}))
        .commit()
    )

    reopened = FileStore("user", tmp_path)
    assert reopened.get_boolean("flag", False) is True
    assert reopened.get_float("ratio", 0.0) == 0.25
    assert reopened.get_int("count", 0) == 3
    assert reopened.get_long("seen", 0) == 2**40
    assert reopened.get_string("name", None) == "ada"
    assert reopened.get_string_set("tags", frozenset()) == {"a", "b"}


def test_file_layout(tmp_path):
    store = FileStore("user", tmp_path)
    store.edit().put_string_set("tags", frozenset({"b", "a"})).put_int("n", 1).commit()

    document = json.loads((tmp_path / "user.json").read_text())
    assert document == {
        "n": {"kind": "int", "value": 1},
        "tags": {"kind": "string_set", "value": ["a", "b"]},
    }
    assert [p.name for p in tmp_path.iterdir()] == ["user.json"]


def test_missing_file_is_empty_scope(tmp_path):
    store = FileStore("user", tmp_path / "nested")
    assert store.get_all() == {}
    assert not (tmp_path / "nested").exists()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2]",
        '{"a": 5}',
        '{"a": {"kind": "colour", "value": 1}}',
        '{"a": {"kind": "object", "value": "{}"}}',
        '{"a": {"kind": "int", "value": 99999999999}}',
        '{"flag": {"kind": "boolean", "value": "false"}}',
        '{"n": {"kind": "int", "value": 3.9}}',
        '{"n": {"kind": "long", "value": true}}',
        '{"tags": {"kind": "string_set", "value": "abc"}}',
        '{"s": {"kind": "string", "value": [1, 2]}}',
        '{"f": {"kind": "float", "value": "0.5"}}',
    ],
)
def test_corrupt_file_raises_store_error(tmp_path, content):
    (tmp_path / "user.json").write_text(content)
    with pytest.raises(PreferenceStoreError):
        FileStore("user", tmp_path)


@pytest.mark.parametrize("name", ["", "../user", "a/b", ".hidden"])
def test_invalid_scope_names(tmp_path, name):
    with pytest.raises(PreferenceStoreError):
        FileStore(name, tmp_path)


def test_reload_picks_up_external_changes(tmp_path):
    store = FileStore("user", tmp_path)
    other = FileStore("user", tmp_path)
    other.edit().put_string("name", "grace").commit()

    assert not store.contains("name")
    store.reload()
    assert store.get_string("name", None) == "grace"


def test_failed_write_keeps_previous_state(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = FileStore("user", blocker)
    with pytest.raises(PreferenceStoreError):
        store.edit().put_int("n", 1).commit()
    assert not store.contains("n")


@pytest.mark.parametrize(
    ("method", "value"),
    [
        ("put_boolean", "false"),
        ("put_boolean", 0),
        ("put_int", 3.9),
        ("put_int", True),
        ("put_long", "12"),
        ("put_float", False),
        ("put_string", 5),
        ("put_string_set", "abc"),
    ],
)
def test_editor_rejects_values_of_another_kind(method, value):
    store = MemoryStore()
    with pytest.raises(PreferenceTypeError):
        getattr(store.edit(), method)("key", value)
    assert store.get_all() == {}


def test_float_entries_accept_whole_numbers(tmp_path):
    (tmp_path / "user.json").write_text('{"ratio": {"kind": "float", "value": 1}}')
    value = FileStore("user", tmp_path).get_float("ratio", 0.0)
    assert value == 1.0
    assert isinstance(value, float)
