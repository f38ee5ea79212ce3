from __future__ import annotations

import json

import pytest

from state.storage import FileStorage, MemoryStorage, StorageError


def test_memory_storage_basic_ops():
    s = MemoryStorage({"a": "1"})
    assert s.get_item("a") == "1"
    assert s.get_item("missing") is None

    s.set_item("b", "2")
    assert sorted(s.keys()) == ["a", "b"]

    s.remove_item("a")
    s.remove_item("a")  # removing twice is fine
    assert s.keys() == ["b"]


def test_memory_storage_fail_writes():
    s = MemoryStorage(fail_writes=True)
    with pytest.raises(StorageError):
        s.set_item("a", "1")
    assert s.get_item("a") is None


def test_file_storage_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    s1 = FileStorage(path)
    s1.set_item("ns.choice_state", '{"plan":"pro"}')

    s2 = FileStorage(path)
    assert s2.get_item("ns.choice_state") == '{"plan":"pro"}'
    assert s2.keys() == ["ns.choice_state"]

    s2.remove_item("ns.choice_state")
    assert FileStorage(path).keys() == []


def test_file_storage_corrupt_file_reads_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")

    s = FileStorage(path)
    assert s.keys() == []

    # next write replaces the corrupt content
    s.set_item("k", "v")
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}


def test_file_storage_drops_non_string_values(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"ok": "yes", "bad": 3}), encoding="utf-8")

    assert FileStorage(path).keys() == ["ok"]


def test_file_storage_default_path_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CHOICE_STORAGE_PATH", str(tmp_path / "env.json"))
    assert FileStorage().path == tmp_path / "env.json"


def test_file_storage_write_failure_raises_and_keeps_items(tmp_path):
    # parent "directory" is a regular file, so mkdir fails
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    s = FileStorage(blocker / "storage.json")

    with pytest.raises(StorageError):
        s.set_item("k", "v")
    assert s.get_item("k") is None
