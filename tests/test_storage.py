from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from constants.keys import StateKeys, StorageKeys
from state.client import CLIENT_QUERY_PARAM, resolve_client_id
from state.snapshots import SnapshotStore, parse_snapshot
from state.storage import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    StorageQuotaExceededError,
    StorageUnavailableError,
)


def test_stores_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(MemoryStore(), KeyValueStore)
    assert isinstance(JsonFileStore(tmp_path), KeyValueStore)


def test_json_file_store_round_trip_per_origin(tmp_path: Path) -> None:
    local = JsonFileStore(tmp_path, origin="local")
    other = JsonFileStore(tmp_path, origin="other")

    local.set_item("medical_customer_info", '{"lastName": "山田"}')

    assert local.get_item("medical_customer_info") == '{"lastName": "山田"}'
    assert other.get_item("medical_customer_info") is None
    assert (tmp_path / "local" / "medical_customer_info.json").exists()


def test_json_file_store_rejects_unsafe_keys(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path)
    with pytest.raises(ValueError):
        store.get_item("../escape")
    with pytest.raises(ValueError):
        JsonFileStore(tmp_path, client="..")


def test_json_file_store_enforces_quota(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path, quota_bytes=20)
    store.set_item("a", "x" * 15)

    with pytest.raises(StorageQuotaExceededError) as excinfo:
        store.set_item("b", "y" * 10)

    assert excinfo.value.key == "b"
    assert excinfo.value.required == 25
    # Replacing an existing value only counts the new size.
    store.set_item("a", "z" * 20)


def test_memory_store_failures() -> None:
    unavailable = MemoryStore(available=False)
    with pytest.raises(StorageUnavailableError):
        unavailable.get_item("k")

    limited = MemoryStore(quota_bytes=4)
    with pytest.raises(StorageQuotaExceededError):
        limited.set_item("k", "12345")


def test_parse_snapshot_requires_an_object() -> None:
    assert parse_snapshot(None) == {}
    assert parse_snapshot('{"a": 1}') == {"a": 1}
    with pytest.raises(ValueError):
        parse_snapshot("[1, 2]")


def test_partial_persist_keeps_unrelated_keys(backend: MemoryStore, store: SnapshotStore) -> None:
    backend.set_item("medical_beneficiary_info", json.dumps({"sameAsBeneficiary": True, "beneficiary": {"lastName": "山田"}}))

    store.load("medical_beneficiary_info")
    store.persist("medical_beneficiary_info", {"sameAsBeneficiary": False})

    stored = json.loads(backend.get_item("medical_beneficiary_info") or "{}")
    assert stored == {"sameAsBeneficiary": False, "beneficiary": {"lastName": "山田"}}


def test_persist_merges_over_in_memory_snapshot(backend: MemoryStore, store: SnapshotStore) -> None:
    store.persist("k", {"a": "1"})
    # A write from elsewhere is overwritten by the next merge (last write wins).
    backend.set_item("k", json.dumps({"a": "1", "b": "external"}))
    store.persist("k", {"c": "3"})

    assert json.loads(backend.get_item("k") or "{}") == {"a": "1", "c": "3"}


def test_unreadable_storage_falls_back_to_empty(caplog: pytest.LogCaptureFixture) -> None:
    store = SnapshotStore(MemoryStore(available=False))

    with caplog.at_level(logging.WARNING):
        assert store.load("medical_customer_info") == {}
    assert "medical_customer_info:load failed" in caplog.text


def test_corrupt_snapshot_falls_back_to_empty(backend: MemoryStore, store: SnapshotStore) -> None:
    backend.set_item("k", "{not json")
    assert store.current("k") == {}


def test_failed_write_keeps_session_copy(caplog: pytest.LogCaptureFixture) -> None:
    backend = MemoryStore(quota_bytes=5)
    store = SnapshotStore(backend)

    with caplog.at_level(logging.ERROR):
        merged = store.persist("k", {"value": "too large"})

    assert merged == {"value": "too large"}
    assert store.current("k") == {"value": "too large"}
    assert backend.get_item("k") is None
    assert "k:persist failed" in caplog.text


def test_snapshot_cache_lives_in_session_state(store: SnapshotStore) -> None:
    import streamlit as st

    store.persist("k", {"a": "1"})
    assert st.session_state[StateKeys.SNAPSHOTS] == {"k": {"a": "1"}}

    store.forget()
    assert st.session_state[StateKeys.SNAPSHOTS] == {}


def test_browser_clients_do_not_share_snapshots(tmp_path: Path) -> None:
    alice = SnapshotStore(JsonFileStore(tmp_path, client="a" * 32), session_state={})
    bob = SnapshotStore(JsonFileStore(tmp_path, client="b" * 32), session_state={})

    alice.persist(StorageKeys.CUSTOMER_INFO, {"lastName": "山田", "password": "abc123"})

    assert bob.load(StorageKeys.CUSTOMER_INFO) == {}
    assert alice.load(StorageKeys.CUSTOMER_INFO)["lastName"] == "山田"
    assert (tmp_path / "local" / ("a" * 32) / "medical_customer_info.json").exists()


def test_resolve_client_id_creates_and_publishes_an_id() -> None:
    params: dict[str, object] = {}
    state: dict[str, object] = {}

    client_id = resolve_client_id(params, state, factory=lambda: "c" * 32)

    assert client_id == "c" * 32
    assert params[CLIENT_QUERY_PARAM] == client_id
    assert state[StateKeys.CLIENT_ID] == client_id


def test_resolve_client_id_keeps_the_browser_id() -> None:
    params: dict[str, object] = {CLIENT_QUERY_PARAM: "d" * 32}

    assert resolve_client_id(params, {}, factory=lambda: "e" * 32) == "d" * 32


def test_resolve_client_id_restores_a_dropped_parameter() -> None:
    state: dict[str, object] = {StateKeys.CLIENT_ID: "f" * 32}
    params: dict[str, object] = {CLIENT_QUERY_PARAM: "../../etc"}

    assert resolve_client_id(params, state, factory=lambda: "0" * 32) == "f" * 32
    assert params[CLIENT_QUERY_PARAM] == "f" * 32
