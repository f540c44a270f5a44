import os
from pathlib import Path

import pytest


def test_enumerator_yields_decoded_regular_files_only(tmp_path: Path):
    from termstore.paths import StoreLayout
    from termstore.settings import SessionStore

    store = SessionStore(layout=StoreLayout(tmp_path))
    for name in ("A", "B", "My Session"):
        with store.open_for_write(name) as w:
            w.write_string("Hostname", name)

    sessions_dir = tmp_path / "sessions"
    (sessions_dir / "subdir").mkdir()
    (sessions_dir / "link-to-dir").symlink_to(sessions_dir / "subdir")
    (sessions_dir / "dangling").symlink_to(tmp_path / "missing")
    if hasattr(os, "mkfifo"):
        os.mkfifo(sessions_dir / "fifo")

    with store.list_sessions() as names:
        found = list(names)

    assert sorted(found) == ["A", "B", "My Session"]


def test_enumerator_cursor_api(tmp_path: Path):
    from termstore.settings import ProfileEnumerator

    (tmp_path / "only%2Fone").write_text("k=v\n")

    cur = ProfileEnumerator.start(tmp_path)
    assert cur.next() == "only/one"
    assert cur.next() is None
    assert cur.next() is None
    cur.finish()
    # finished cursor is inert
    assert cur.next() is None
    cur.finish()


def test_enumerator_missing_directory_is_empty(tmp_path: Path):
    from termstore.settings import ProfileEnumerator

    cur = ProfileEnumerator.start(tmp_path / "does-not-exist")
    assert cur.next() is None
    assert list(cur) == []
    cur.finish()


def test_enumerator_is_single_pass(tmp_path: Path):
    from termstore.settings import ProfileEnumerator

    for n in ("x", "y"):
        (tmp_path / n).write_text("")

    cur = ProfileEnumerator.start(tmp_path)
    assert sorted(cur) == ["x", "y"]
    assert list(cur) == []
    cur.finish()


@pytest.mark.parametrize("name", ["a b", "ü", "100%", "x/y"])
def test_listing_roundtrips_through_codec(tmp_path: Path, name: str):
    from termstore.paths import StoreLayout
    from termstore.settings import SessionStore

    store = SessionStore(layout=StoreLayout(tmp_path))
    with store.open_for_write(name) as w:
        w.write_string("k", "v")
    with store.list_sessions() as names:
        assert list(names) == [name]
