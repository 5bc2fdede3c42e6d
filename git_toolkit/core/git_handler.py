# core/git_handler.py
# -*- coding: utf-8 -*-
import os
import shutil
import subprocess
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

DETACHED_HEAD = "Detached HEAD"

# internal failure codes, mirrored in CommandResult.returncode
RC_NOT_FOUND = -1
RC_OS_ERROR = -2
RC_PERMISSION = -3

FIELD_SEP = "\x1f"


@dataclass
class CommandResult:
    """Combined stdout/stderr and exit status of one git invocation."""
    args: List[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def display_cmd(self) -> str:
        return " ".join(self.args)


@dataclass
class LogEntry:
    commit: str
    subject: str
    when: str
    author: str


@dataclass
class BranchRef:
    name: str
    short_hash: str
    updated: str


@dataclass
class StatusEntry:
    code: str
    path: str

    @property
    def staged(self) -> bool:
        return self.code[:1] not in (" ", "?", "!")


class GitHandler:
    """Runs git against a repository directory and captures its output.

    Every call is `<git> -C <repo> <args...>`, synchronous, with stdin closed
    and stderr folded into stdout. Failures never raise: they come back as a
    CommandResult with a non-zero (or negative, for internal errors) code.
    """

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    def is_available(self) -> bool:
        return shutil.which(self.git_executable) is not None

    def run(self, repo_path: str, *args: str, env: Optional[Dict[str, str]] = None) -> CommandResult:
        command = [self.git_executable, "-C", repo_path, *args]
        display_cmd = " ".join(command)

        run_env = None
        if env:
            run_env = os.environ.copy()
            run_env.update(env)

        logging.info(f"Running: {display_cmd}")
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=run_env,
                shell=False,
                check=False,
            )
        except FileNotFoundError:
            error_msg = f"Error: command '{self.git_executable}' not found. Make sure Git is installed and on PATH."
            logging.error(error_msg)
            return CommandResult(command, RC_NOT_FOUND, error_msg)
        except PermissionError as e:
            error_msg = f"Error: permission denied running '{self.git_executable}': {e}"
            logging.error(error_msg)
            return CommandResult(command, RC_PERMISSION, error_msg)
        except OSError as e:
            error_msg = f"Unexpected error running command: {e}\nCommand: {display_cmd}"
            logging.exception(f"Unexpected error running: {display_cmd}")
            return CommandResult(command, RC_OS_ERROR, error_msg)

        output = result.stdout or ""
        if result.returncode != 0:
            logging.warning(f"Command failed (RC {result.returncode}): {display_cmd}\n{output.strip()}")
        else:
            logging.info(f"Command succeeded: {display_cmd}")
        return CommandResult(command, result.returncode, output)

    # --- queries used by the selector and the pickers ---

    def is_valid_repo(self, path: str) -> bool:
        """True when path is an existing directory inside a git working tree."""
        if not path or not os.path.isdir(path):
            return False
        result = self.run(path, "rev-parse", "--is-inside-work-tree")
        return result.ok and result.output.strip() == "true"

    def current_branch(self, repo_path: str) -> str:
        """Short name of the checked-out branch, or DETACHED_HEAD."""
        result = self.run(repo_path, "symbolic-ref", "--short", "-q", "HEAD")
        branch = result.output.strip()
        if not result.ok or not branch:
            return DETACHED_HEAD
        return branch

    def has_uncommitted_changes(self, repo_path: str) -> bool:
        """True if the working tree or the index differ from HEAD.

        Anything other than a clean exit from both checks counts as dirty.
        """
        worktree = self.run(repo_path, "diff", "--quiet")
        if not worktree.ok:
            return True
        index = self.run(repo_path, "diff", "--cached", "--quiet")
        return not index.ok

    def log_entries(self, repo_path: str, limit: int) -> Tuple[CommandResult, List[LogEntry]]:
        fmt = FIELD_SEP.join(["%h", "%s", "%cr", "%an"])
        result = self.run(repo_path, "log", "-n", str(limit), f"--pretty=format:{fmt}")
        entries = []
        if result.ok:
            for line in result.output.splitlines():
                parts = line.split(FIELD_SEP)
                if len(parts) != 4 or not parts[0]:
                    logging.warning(f"Could not parse log line: {line!r}")
                    continue
                entries.append(LogEntry(*parts))
        return result, entries

    def branches(self, repo_path: str, include_remote: bool = False) -> Tuple[CommandResult, List[BranchRef]]:
        fmt = FIELD_SEP.join(["%(refname:short)", "%(objectname:short)", "%(authordate:relative)"])
        refs = ["refs/heads", "refs/remotes"] if include_remote else ["refs/heads"]
        result = self.run(repo_path, "for-each-ref", f"--format={fmt}", *refs)
        branches = []
        if result.ok:
            for line in result.output.splitlines():
                parts = line.split(FIELD_SEP)
                if len(parts) != 3 or not parts[0]:
                    continue
                # origin/HEAD is a symbolic alias, not something to check out
                if include_remote and parts[0].endswith("/HEAD"):
                    continue
                branches.append(BranchRef(*parts))
        return result, branches

    def status_entries(self, repo_path: str) -> Tuple[CommandResult, List[StatusEntry]]:
        result = self.run(repo_path, "status", "--porcelain=v1", "-z")
        entries = []
        if result.ok:
            fields = result.output.split("\0")
            i = 0
            while i < len(fields):
                field = fields[i]
                i += 1
                if len(field) < 4:
                    continue
                code, path = field[:2], field[3:]
                if code[0] in ("R", "C"):
                    # rename/copy records carry the source path in the next field
                    i += 1
                entries.append(StatusEntry(code, path))
        return result, entries

    def remotes(self, repo_path: str) -> Tuple[CommandResult, List[str]]:
        result = self.run(repo_path, "remote")
        names = [line.strip() for line in result.output.splitlines() if line.strip()] if result.ok else []
        return result, names

    def tags(self, repo_path: str) -> Tuple[CommandResult, List[str]]:
        result = self.run(repo_path, "tag")
        names = [line.strip() for line in result.output.splitlines() if line.strip()] if result.ok else []
        return result, names

    def stashes(self, repo_path: str) -> Tuple[CommandResult, List[Tuple[str, str]]]:
        result = self.run(repo_path, "stash", "list")
        stashes = []
        if result.ok:
            for line in result.output.splitlines():
                if not line.strip():
                    continue
                ref, _, desc = line.partition(": ")
                stashes.append((ref, desc))
        return result, stashes

    def tree_files(self, repo_path: str, commit: str) -> Tuple[CommandResult, List[str]]:
        result = self.run(repo_path, "ls-tree", "-r", "--name-only", "-z", commit)
        files = [f for f in result.output.split("\0") if f] if result.ok else []
        return result, files
