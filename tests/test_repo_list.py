"""Tests for the saved repository list file."""

from unittest.mock import patch

import pytest

from git_toolkit.core.repo_list import RepositoryList


@pytest.fixture
def list_path(tmp_path):
    return tmp_path / "repos.list"


@pytest.fixture
def repo_list(list_path):
    return RepositoryList(str(list_path))


class TestLoad:
    """Reading the list never fails."""

    def test_missing_file_is_empty(self, repo_list):
        assert repo_list.load() == []

    def test_blank_and_duplicate_lines_are_skipped(self, list_path, repo_list):
        list_path.write_text("/a\n\n/b\n/a\n\n", encoding="utf-8")
        assert repo_list.load() == ["/a", "/b"]

    def test_unreadable_file_is_empty(self, list_path, repo_list):
        list_path.write_bytes(b"\xff\xfe\x00bad")
        assert repo_list.load() == []


class TestAdd:
    def test_add_creates_file(self, list_path, repo_list):
        assert repo_list.add("/a") is True
        assert list_path.read_text(encoding="utf-8") == "/a\n"

    def test_add_is_idempotent(self, list_path, repo_list):
        repo_list.add("/a")
        repo_list.add("/a")
        assert repo_list.load() == ["/a"]
        assert list_path.read_text(encoding="utf-8") == "/a\n"

    def test_add_keeps_insertion_order(self, repo_list):
        for path in ("/c", "/a", "/b"):
            repo_list.add(path)
        assert repo_list.load() == ["/c", "/a", "/b"]

    def test_add_creates_missing_directory(self, tmp_path):
        repo_list = RepositoryList(str(tmp_path / "nested" / "dir" / "repos.list"))
        assert repo_list.add("/a") is True
        assert repo_list.load() == ["/a"]


class TestRemoveMany:
    """Removal keeps the survivors in their original order."""

    def test_remove_middle_entry(self, list_path, repo_list):
        list_path.write_text("/a\n/b\n/c\n", encoding="utf-8")
        assert repo_list.remove_many({"/b"}) is True
        assert list_path.read_text(encoding="utf-8") == "/a\n/c\n"

    def test_remove_several_entries(self, list_path, repo_list):
        list_path.write_text("/a\n/b\n/c\n/d\n", encoding="utf-8")
        repo_list.remove_many(["/d", "/a"])
        assert repo_list.load() == ["/b", "/c"]

    def test_empty_removal_set_does_not_touch_file(self, list_path, repo_list):
        assert repo_list.remove_many([]) is True
        assert not list_path.exists()

    def test_absent_paths_are_a_no_op(self, list_path, repo_list):
        list_path.write_text("/a\n/b\n", encoding="utf-8")
        with patch.object(repo_list, "_write") as write:
            assert repo_list.remove_many(["/zzz"]) is True
        write.assert_not_called()
        assert repo_list.load() == ["/a", "/b"]


class TestClear:
    def test_clear_empties_list(self, list_path, repo_list):
        list_path.write_text("/a\n/b\n", encoding="utf-8")
        assert repo_list.clear() is True
        assert list_path.read_text(encoding="utf-8") == ""
        assert repo_list.load() == []


class TestAtomicWrite:
    """A failed write leaves the previous list and no temporary file behind."""

    def test_replace_failure_keeps_old_content(self, tmp_path, list_path, repo_list):
        list_path.write_text("/a\n", encoding="utf-8")
        with patch("git_toolkit.core.repo_list.os.replace", side_effect=OSError("disk full")):
            assert repo_list.add("/b") is False
        assert list_path.read_text(encoding="utf-8") == "/a\n"
        assert list(tmp_path.glob(".tmp_list_*")) == []

    def test_successful_write_leaves_no_temporary_file(self, tmp_path, repo_list):
        repo_list.add("/a")
        repo_list.remove_many(["/a"])
        assert list(tmp_path.glob(".tmp_*")) == []
