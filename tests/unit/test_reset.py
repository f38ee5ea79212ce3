from __future__ import annotations

import logging

from state.reset import clear_namespace
from state.storage import MemoryStorage, StorageError


def _seeded() -> MemoryStorage:
    return MemoryStorage(
        {
            "com.box.developer.choice_state": '{"plan":"pro"}',
            "com.box.developer.client_id": "abc",
            "com.box.developer.client_secret": "xyz",
            "com.other.choice_state": "{}",
        }
    )


def test_clear_whole_namespace():
    s = _seeded()
    removed = clear_namespace(s, "com.box.developer")
    assert removed == [
        "com.box.developer.choice_state",
        "com.box.developer.client_id",
        "com.box.developer.client_secret",
    ]
    assert s.keys() == ["com.other.choice_state"]


def test_clear_by_id_prefixes():
    s = _seeded()
    removed = clear_namespace(s, "com.box.developer", " client , ,")
    assert removed == ["com.box.developer.client_id", "com.box.developer.client_secret"]
    assert s.get_item("com.box.developer.choice_state") == '{"plan":"pro"}'


def test_clear_with_failing_storage_logs(caplog):
    class _Broken(MemoryStorage):
        def keys(self):
            raise StorageError("disabled")

    with caplog.at_level(logging.WARNING):
        assert clear_namespace(_Broken(), "ns") == []
    assert len(caplog.records) == 1
