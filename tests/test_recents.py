"""Tests for the recents list policy and its backing file."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from startify import storage as storage_module
from startify.recents import RecentsList, RecentsStore, normalize_path, record, remove
from startify.storage import StorageError


def _lexical_store(path: Path, max_length: int = 10) -> RecentsStore:
    return RecentsStore(path, max_length=max_length, resolve_symlinks=False)


def test_record_moves_existing_entry_to_front() -> None:
    recents = RecentsList(("/a", "/b", "/c"), max_length=5)

    updated = record(recents, "/c", resolve_symlinks=False)

    assert updated.entries == ("/c", "/a", "/b")
    assert recents.entries == ("/a", "/b", "/c")


def test_record_twice_is_idempotent_at_head() -> None:
    recents = RecentsList(("/a", "/b"), max_length=5)

    once = record(recents, "/x", resolve_symlinks=False)
    twice = record(once, "/x", resolve_symlinks=False)

    assert once == twice
    assert twice.entries.count("/x") == 1


@pytest.mark.parametrize("max_length", [1, 3, 10])
def test_record_evicts_tail_when_full(max_length: int) -> None:
    entries = tuple(f"/file{i}" for i in range(max_length))
    recents = RecentsList(entries, max_length=max_length)

    updated = record(recents, "/new", resolve_symlinks=False)

    assert len(updated) == max_length
    assert updated.entries[0] == "/new"
    assert entries[-1] not in updated
    assert updated.entries[1:] == entries[:-1]


def test_record_normalizes_dot_segments() -> None:
    recents = record(RecentsList(), "/a/b/../c/./d.txt", resolve_symlinks=False)
    recents = record(recents, "/a/c/d.txt", resolve_symlinks=False)

    assert recents.entries == ("/a/c/d.txt",)


def test_record_makes_relative_paths_absolute(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    recents = record(RecentsList(), "notes.md")

    assert recents.entries == (str((tmp_path / "notes.md").resolve()),)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_record_dedupes_symlinked_paths(tmp_path: Path) -> None:
    target = tmp_path / "real.txt"
    target.write_text("x", encoding="utf-8")
    link = tmp_path / "link.txt"
    try:
        link.symlink_to(target)
    except OSError:  # pragma: no cover - e.g. unprivileged Windows
        pytest.skip("cannot create symlinks")

    recents = record(RecentsList(), target)
    recents = record(recents, link)

    assert recents.entries == (str(target.resolve()),)


def test_record_keeps_missing_files(tmp_path: Path) -> None:
    missing = tmp_path / "does" / "not" / "exist.md"

    recents = record(RecentsList(), missing)

    assert recents.entries == (str(missing.resolve()),)
    assert not missing.exists()


@pytest.mark.parametrize("bad", ["", "a\nb"])
def test_normalize_path_rejects_unrepresentable_paths(bad: str) -> None:
    with pytest.raises(ValueError):
        normalize_path(bad)


def test_remove_drops_entry_at_index() -> None:
    recents = RecentsList(("/a", "/b", "/c"))

    assert remove(recents, 1).entries == ("/a", "/c")
    with pytest.raises(IndexError):
        remove(recents, 3)


def test_load_missing_file_returns_empty_list(tmp_path: Path) -> None:
    store = _lexical_store(tmp_path / "nested" / "recents", max_length=4)

    recents = store.load()

    assert recents.entries == ()
    assert recents.max_length == 4


def test_save_then_load_round_trips(tmp_path: Path) -> None:
    store = _lexical_store(tmp_path / "recents")
    original = RecentsList(("/d", "/with space/file.md", "/ünïcode"), max_length=10)

    store.save(original)

    assert store.load() == original
    assert (tmp_path / "recents").read_text(encoding="utf-8") == (
        "/d\n/with space/file.md\n/ünïcode\n"
    )


def test_load_skips_blank_lines_and_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "recents"
    path.write_text("/a\n\n/b\n/a\n/c\n", encoding="utf-8")

    recents = _lexical_store(path, max_length=2).load()

    assert recents.entries == ("/a", "/b")


def test_load_corrupt_file_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "recents"
    path.write_bytes(b"/a\n\xff\xfe\x00garbage\n")

    with pytest.raises(StorageError):
        _lexical_store(path).load()


def test_save_failure_keeps_previous_file(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "recents"
    path.write_text("/old\n", encoding="utf-8")
    store = _lexical_store(path)

    def failing_replace(src: str, dst: str) -> None:
        raise OSError("rename failed")

    monkeypatch.setattr(storage_module.os, "replace", failing_replace)

    with pytest.raises(StorageError):
        store.save(RecentsList(("/new", "/old")))

    assert path.read_text(encoding="utf-8") == "/old\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["recents"]


def test_interrupted_save_leaves_old_or_new_file(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "recents"
    path.write_text("/old\n", encoding="utf-8")
    store = _lexical_store(path)

    def interrupted_fsync(fd: int) -> None:
        raise KeyboardInterrupt

    monkeypatch.setattr(storage_module.os, "fsync", interrupted_fsync)

    with pytest.raises(KeyboardInterrupt):
        store.save(RecentsList(("/new", "/old")))

    assert path.read_text(encoding="utf-8") == "/old\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["recents"]


def test_store_record_then_save_scenario(tmp_path: Path) -> None:
    path = tmp_path / "recents"
    path.write_text("/a\n/b\n/c\n", encoding="utf-8")
    store = _lexical_store(path, max_length=3)

    store.save(store.record(store.load(), "/d"))

    assert path.read_text(encoding="utf-8") == "/d\n/a\n/b\n"


@pytest.mark.parametrize(
    "separator", ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029"]
)
def test_unicode_line_boundaries_survive_round_trip(
    tmp_path: Path, separator: str
) -> None:
    store = _lexical_store(tmp_path / "recents")
    recents = store.record(RecentsList(("/a",)), f"/x{separator}y.md")

    store.save(recents)

    assert store.load() == recents
    assert recents.entries == (f"/x{separator}y.md", "/a")


def test_load_tolerates_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "recents"
    path.write_bytes(b"/a\r\n/b\r\n")

    assert _lexical_store(path).load().entries == ("/a", "/b")


def test_recents_list_rejects_entries_beyond_bound() -> None:
    with pytest.raises(ValueError):
        RecentsList(("/a", "/b", "/c"), max_length=2)
    with pytest.raises(ValueError):
        RecentsList(max_length=0)
