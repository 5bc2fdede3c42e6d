# core/session.py
# -*- coding: utf-8 -*-
from dataclasses import dataclass, replace

from git_toolkit.core.git_handler import CommandResult, GitHandler
from git_toolkit.core.temp_files import TempFileManager


@dataclass(frozen=True)
class Session:
    """The current repository plus the collaborators every operation needs.

    Passed explicitly to the dispatcher and to each handler; changing the
    repository produces a new Session.
    """
    repo_path: str
    git: GitHandler
    dialogs: object
    config: dict
    temp_files: TempFileManager

    def run_git(self, *args: str, env=None) -> CommandResult:
        return self.git.run(self.repo_path, *args, env=env)

    def with_repo(self, repo_path: str) -> "Session":
        return replace(self, repo_path=repo_path)
