"""Shared fixtures: a scripted dialog layer, a fake git handler and real temporary repositories."""

from __future__ import annotations

import copy
import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest

from git_toolkit.core.config import DEFAULT_CONFIG
from git_toolkit.core.git_handler import FIELD_SEP, CommandResult, GitHandler
from git_toolkit.core.session import Session
from git_toolkit.core.temp_files import TempFileManager
from git_toolkit.ui.dialogs import Dialogs

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


class ScriptedDialogs(Dialogs):
    """Dialog layer that answers prompts from a queue and records every notification.

    A queued response may be a callable; it is called with no arguments and its
    return value is used, which lets a test change state between two prompts.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.prompts: list[tuple[str, tuple]] = []
        self.errors: list[str] = []
        self.infos: list[str] = []
        self.texts: list[tuple[str, str]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def _answer(self, method: str, *args: Any):
        self.prompts.append((method, args))
        if not self.responses:
            raise AssertionError(f"Unexpected {method} prompt: {args[0]!r}")
        response = self.responses.pop(0)
        if callable(response):
            response = response()
        return response

    def prompts_of(self, method: str) -> list[tuple]:
        return [args for name, args in self.prompts if name == method]

    def choose_one(self, title, columns, choices, text=""):
        return self._answer("choose_one", title, columns, choices, text)

    def choose_many(self, title, columns, choices, text=""):
        return self._answer("choose_many", title, columns, choices, text)

    def ask_text(self, title, label, default=""):
        return self._answer("ask_text", title, label, default)

    def ask_form(self, title, fields, text=""):
        return self._answer("ask_form", title, fields, text)

    def confirm(self, title, text):
        return self._answer("confirm", title, text)

    def browse_directory(self, title):
        return self._answer("browse_directory", title)

    def error(self, text):
        self.errors.append(text)

    def info(self, text):
        self.infos.append(text)

    def show_text(self, title, text):
        self.texts.append((title, text))


class FakeGit(GitHandler):
    """GitHandler that never starts a process.

    run() answers from canned (returncode, output) pairs keyed by an argument
    prefix, longest prefix first; anything unscripted succeeds with no output.
    Message files passed with -F are read while they still exist.
    """

    def __init__(self):
        super().__init__("git")
        self.calls: list[list[str]] = []
        self.repo_paths: list[str] = []
        self.envs: list[dict | None] = []
        self.message_files: dict[str, str] = {}
        self.responses: dict[tuple, tuple[int, str]] = {}
        self.valid_repos: set[str] = set()
        self.branch = "main"
        self.dirty = False

    def respond(self, *prefix: str, returncode: int = 0, output: str = "") -> None:
        self.responses[tuple(prefix)] = (returncode, output)

    def run(self, repo_path, *args, env=None):
        self.calls.append(list(args))
        self.repo_paths.append(repo_path)
        self.envs.append(env)
        if "-F" in args:
            path = args[args.index("-F") + 1]
            self.message_files[path] = Path(path).read_text(encoding="utf-8")

        returncode, output = 0, ""
        for size in range(len(args), 0, -1):
            if args[:size] in self.responses:
                returncode, output = self.responses[args[:size]]
                break
        return CommandResult(["git", "-C", repo_path, *args], returncode, output)

    def is_valid_repo(self, path):
        return path in self.valid_repos

    def current_branch(self, repo_path):
        return self.branch

    def has_uncommitted_changes(self, repo_path):
        return self.dirty

    def commands(self, name: str) -> list[list[str]]:
        """Recorded calls whose git subcommand is name."""
        return [call for call in self.calls if call and call[0] == name]


def log_output(*commits: str) -> str:
    """`git log` output in the picker's format, one line per short hash."""
    return "\n".join(FIELD_SEP.join([c, f"Subject of {c}", "2 days ago", "Dev"]) for c in commits)


def branch_output(*names: str) -> str:
    return "\n".join(FIELD_SEP.join([name, "abc1234", "3 hours ago"]) for name in names)


@pytest.fixture
def dialogs():
    return ScriptedDialogs()


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def config():
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def session(tmp_path, fake_git, dialogs, config):
    """Session on a fake repository path with message files under tmp_path."""
    repo = str(tmp_path / "repo")
    fake_git.valid_repos.add(repo)
    return Session(repo, fake_git, dialogs, config, TempFileManager(str(tmp_path / "config")))


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args], capture_output=True, text=True, check=True
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """A real repository with one commit on branch main."""
    repo = tmp_path / "real_repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")
    (repo / "README.txt").write_text("first\n", encoding="utf-8")
    _git(repo, "add", "README.txt")
    _git(repo, "commit", "-q", "-m", "Initial commit")
    return repo


@pytest.fixture
def run_git():
    """Helper to run git in a test repository and return its stdout."""
    return _git
