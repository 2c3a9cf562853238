"""Tests for ops/add.py -- canonicalize, dedup and append."""

import os

import pytest

from filec.errors import LockError, NoNewFilesError
from filec.models import OpenMode
from filec.ops.add import add
from filec.store import ClipboardStore


@pytest.fixture
def store(tmp_path):
    return ClipboardStore(tmp_path / "clip" / "buf.txt")


@pytest.fixture(autouse=True)
def _clip_dir(tmp_path):
    (tmp_path / "clip").mkdir()


@pytest.fixture
def files(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    made = []
    for name in ("a.txt", "b.txt"):
        f = data / name
        f.write_text(name)
        made.append(f.resolve())
    return made


class TestAdd:
    def test_creates_clipboard_file(self, store, files):
        result = add(store, [str(files[0])])
        assert result.added == [files[0]]
        assert store.path.read_text() == f"{files[0]}\n"

    def test_duplicate_argument_stored_once(self, store, files):
        add(store, [str(files[0]), str(files[0])])
        assert store.contents() == [files[0]]
        assert store.path.read_text().count("\n") == 1

    def test_different_spellings_collapse(self, store, files, monkeypatch):
        monkeypatch.chdir(files[0].parent)
        spelled = [
            str(files[0]),
            "a.txt",
            os.path.join("..", "data", "a.txt"),
            str(files[0].parent / "." / "a.txt"),
        ]
        result = add(store, spelled)
        assert result.added == [files[0]]
        assert store.contents() == [files[0]]

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlink_collapses_to_target(self, store, files, tmp_path):
        link = tmp_path / "link.txt"
        link.symlink_to(files[0])
        add(store, [str(link), str(files[0])])
        assert store.contents() == [files[0]]

    def test_directories_can_be_queued(self, store, tmp_path):
        d = tmp_path / "dir"
        d.mkdir()
        add(store, [str(d)])
        assert store.contents() == [d.resolve()]

    def test_appends_to_existing(self, store, files):
        add(store, [str(files[0])])
        result = add(store, [str(files[0]), str(files[1])])
        assert result.added == [files[1]]
        assert store.contents() == sorted(files)
        assert store.path.read_text() == f"{files[0]}\n{files[1]}\n"

    def test_second_add_is_idempotent(self, store, files):
        add(store, [str(f) for f in files])
        before = store.path.read_bytes()
        with pytest.raises(NoNewFilesError):
            add(store, [str(f) for f in files])
        assert store.path.read_bytes() == before

    def test_unresolved_inputs_are_skipped(self, store, files, tmp_path):
        missing = str(tmp_path / "missing.txt")
        result = add(store, [missing, str(files[0])])
        assert result.added == [files[0]]
        assert result.unresolved == [missing]
        assert store.contents() == [files[0]]

    def test_nothing_resolves(self, store, tmp_path):
        with pytest.raises(NoNewFilesError):
            add(store, [str(tmp_path / "missing.txt")])
        assert store.path.read_text() == ""

    def test_empty_input(self, store):
        with pytest.raises(NoNewFilesError):
            add(store, [])

    def test_locked_clipboard(self, store, files):
        store.path.write_text("")
        with store.open_locked(OpenMode.READ):
            with pytest.raises(LockError):
                add(store, [str(files[0])])
        assert store.path.read_text() == ""

    @pytest.mark.skipif(os.name == "nt", reason="newline is not a legal filename char")
    def test_newline_in_name_is_skipped(self, store, files, tmp_path):
        odd = tmp_path / "data" / "a.txt\nb.txt"
        odd.write_text("odd")
        result = add(store, [str(odd), str(files[1])])
        assert result.added == [files[1]]
        assert result.unresolved == [str(odd)]
        assert store.contents() == [files[1]]
