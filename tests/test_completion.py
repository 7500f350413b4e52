import os
from pathlib import Path

import pytest

from voidcli.completion import CommandCompletion, Completion


def _make_file(directory: Path, name: str, mode: int) -> Path:
    path = directory / name
    path.write_text("#!/bin/sh\n")
    os.chmod(path, mode)
    return path


@pytest.fixture
def bin_dir(tmp_path, monkeypatch):
    directory = tmp_path / "bin"
    directory.mkdir()
    _make_file(directory, "mytool", 0o755)
    _make_file(directory, "myother", 0o755)
    _make_file(directory, "mydata", 0o644)
    (directory / "mydir").mkdir()
    monkeypatch.setenv("PATH", str(directory))
    return directory


def test_completion_initialization(bin_dir):
    completion = Completion()
    assert not completion.cache_initialized
    assert completion.initialize_cache() is None
    assert completion.cache_initialized


def test_command_completion_cache(bin_dir):
    completion = CommandCompletion()
    completion.initialize_cache()
    assert completion.system_paths == [str(bin_dir)]
    assert sorted(completion.get_completions("my")) == ["myother", "mytool"]
    assert completion.get_completions("myt") == ["mytool"]
    assert completion.get_completions("zzz") == []


def test_scan_directory(bin_dir):
    completion = CommandCompletion()
    assert sorted(completion.scan_directory(bin_dir)) == ["myother", "mytool"]


def test_scan_missing_directory(tmp_path):
    completion = CommandCompletion()
    assert completion.scan_directory(tmp_path / "missing") == []


def test_complete_command_initializes_lazily(bin_dir):
    completion = Completion()
    assert completion.complete_command("myo") == ["myother"]
    assert completion.cache_initialized


def test_complete_path_in_current_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "alpha.txt").write_text("a")
    (tmp_path / "alps").mkdir()
    (tmp_path / "beta").write_text("b")
    assert sorted(Completion().complete_path("al")) == ["alpha.txt", "alps/"]


def test_complete_path_in_subdirectory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "file").write_text("x")
    (sub / "other").write_text("x")
    assert Completion().complete_path("sub/fi") == ["sub/file"]


def test_complete_path_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert Completion().complete_path("nowhere/x") == []


def test_complete_empty_and_blank(bin_dir):
    completion = Completion()
    assert completion.complete("", 0) == []
    assert completion.complete("   ", 3) == []


def test_complete_first_word_is_command(bin_dir):
    assert Completion().complete("myt", 3) == ["mytool"]


def test_complete_later_word_is_path(bin_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notes.md").write_text("n")
    assert Completion().complete("cat no", 6) == ["notes.md"]


def test_complete_uses_text_before_cursor(bin_dir):
    assert Completion().complete("mytool extra", 3) == ["mytool"]


def test_complete_cursor_out_of_range(bin_dir):
    with pytest.raises(ValueError):
        Completion().complete("ls", 10)