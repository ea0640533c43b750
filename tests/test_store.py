import logging

import pytest

from simple_whitelist import Outcome, StoreNotReadyError, WhitelistStore, normalize


@pytest.fixture
def path(tmp_path):
    return tmp_path / "SimpleWhitelist.txt"


@pytest.fixture
def store(path):
    s = WhitelistStore(path)
    s.initialize()
    return s


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_normalize_trims_and_lowercases():
    assert normalize("  STEAM_0:1:12345\t") == "steam_0:1:12345"


def test_initialize_missing_file_creates_empty_file(path):
    s = WhitelistStore(path)
    s.initialize()
    assert s.ready is True
    assert s.entries() == []
    assert path.exists()
    assert path.read_text(encoding="utf-8") == ""


def test_initialize_loads_existing_file(path):
    path.write_text("abc\ndef", encoding="utf-8")
    s = WhitelistStore(path)
    s.initialize()
    assert s.entries() == ["abc", "def"]


def test_initialize_corrupt_file_recovers_empty(path, caplog):
    path.write_bytes(b"\xff\xfe\xfa\xfb")
    caplog.set_level(logging.ERROR, logger="simple_whitelist")
    s = WhitelistStore(path)
    s.initialize()
    assert s.entries() == []
    assert path.read_bytes() == b""
    assert "Could not read whitelist file" in caplog.text


def test_initialize_unreadable_path_does_not_raise(tmp_path):
    # A directory can be neither read nor written as a file.
    s = WhitelistStore(tmp_path)
    s.initialize()
    assert s.ready is True
    assert s.entries() == []


def test_use_before_initialize_raises(path):
    s = WhitelistStore(path)
    with pytest.raises(StoreNotReadyError):
        s.add("abc")
    with pytest.raises(StoreNotReadyError):
        s.is_authorized("abc")


def test_add_then_authorized(store):
    result = store.add("steam_0:0:1")
    assert result.outcome is Outcome.ADDED
    assert result.ok is True
    assert store.is_authorized("steam_0:0:1") is True


def test_add_scenario_writes_normalized_line(store, path):
    result = store.add("STEAM_0:1:12345")
    assert result.identifier == "steam_0:1:12345"
    assert result.persisted is True
    assert _lines(path) == ["steam_0:1:12345"]
    assert store.is_authorized("steam_0:1:12345") is True


def test_add_duplicate_reports_already_exists(store, path):
    store.add("abc")
    before = path.read_text(encoding="utf-8")
    result = store.add("  ABC ")
    assert result.outcome is Outcome.ALREADY_EXISTS
    assert result.persisted is False
    assert store.entries() == ["abc"]
    assert path.read_text(encoding="utf-8") == before


@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_add_empty_is_usage_error(store, path, value):
    result = store.add(value)
    assert result.outcome is Outcome.USAGE_ERROR
    assert store.entries() == []
    assert path.read_text(encoding="utf-8") == ""


def test_remove_then_not_authorized(store):
    store.add("abc")
    result = store.remove("ABC")
    assert result.outcome is Outcome.REMOVED
    assert store.is_authorized("abc") is False


def test_remove_missing_leaves_file_unchanged(store, path):
    store.add("abc")
    store.add("def")
    mtime = path.stat().st_mtime_ns
    result = store.remove("xyz")
    assert result.outcome is Outcome.NOT_FOUND
    assert _lines(path) == ["abc", "def"]
    assert path.stat().st_mtime_ns == mtime


def test_remove_empty_is_usage_error(store):
    assert store.remove(" ").outcome is Outcome.USAGE_ERROR


def test_entries_keep_insertion_order(store):
    for identifier in ["zeta", "alpha", "mid"]:
        store.add(identifier)
    assert store.entries() == ["zeta", "alpha", "mid"]


def test_entries_returns_copy(store):
    store.add("abc")
    store.entries().clear()
    assert store.entries() == ["abc"]


def test_is_authorized_is_case_insensitive(store):
    store.add("steam_0:1:5")
    assert store.is_authorized("STEAM_0:1:5") is True
    assert "Steam_0:1:5" in store


def test_is_authorized_does_not_trim(store):
    # Whitespace is only trimmed on the admin path.
    store.add("abc")
    assert store.is_authorized(" abc ") is False


def test_roundtrip_through_file(path, store):
    for identifier in ["a", "b", "c"]:
        store.add(identifier)
    reloaded = WhitelistStore(path)
    reloaded.initialize()
    assert set(reloaded.entries()) == {"a", "b", "c"}


def test_load_handles_crlf_and_blank_lines(path):
    path.write_bytes(b"ABC\r\n\r\ndef \r\nabc\r\n")
    s = WhitelistStore(path)
    s.initialize()
    assert s.entries() == ["abc", "def"]
    assert s.is_authorized("def") is True


def test_persist_failure_keeps_memory_change(store, tmp_path, caplog):
    caplog.set_level(logging.ERROR, logger="simple_whitelist")
    store.path = tmp_path  # directory: open for writing fails
    result = store.add("abc")
    assert result.outcome is Outcome.ADDED
    assert result.persisted is False
    assert store.is_authorized("abc") is True
    assert "Could not write whitelist file" in caplog.text


def test_load_logs_entry_count(path, caplog):
    path.write_text("a\nb\n", encoding="utf-8")
    caplog.set_level(logging.INFO, logger="simple_whitelist")
    WhitelistStore(path).initialize()
    assert "Successfully loaded 2 whitelist entries" in caplog.text


@pytest.mark.parametrize("value", ["steam:1\nsteam:2", "steam:1\rsteam:2", "a\r\nb"])
def test_add_rejects_embedded_line_breaks(store, path, value):
    result = store.add(value)
    assert result.outcome is Outcome.USAGE_ERROR
    assert store.entries() == []
    assert path.read_text(encoding="utf-8") == ""


@pytest.mark.parametrize("value", ["steam:1 x", "steam:1\x0cx", "steam:1\x85x"])
def test_roundtrip_keeps_other_separators_intact(path, store, value):
    assert store.add(value).outcome is Outcome.ADDED
    reloaded = WhitelistStore(path)
    reloaded.initialize()
    assert reloaded.entries() == store.entries()
