# operations/common.py
# -*- coding: utf-8 -*-
"""Shared building blocks for the operation handlers.

Every handler follows the same shape: collect parameters (cancel aborts with
no side effect), optionally run the dirty-tree guard, build the git argument
list, run it once, then report the failure output in an error dialog or the
result in a notification / text viewer.
"""
import logging
from typing import Iterable, List, Optional

from git_toolkit.core.git_handler import CommandResult
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice

NO_OUTPUT = "(no output)"

# git must never wait on an interactive editor
NO_EDITOR_ENV = {"GIT_EDITOR": "cat"}


def split_passthrough(raw: Optional[str]) -> List[str]:
    """Raw passthrough arguments: free text split on whitespace into separate git arguments.

    Nothing is validated or quoted; malformed input is left for git to reject.
    """
    if not raw:
        return []
    return raw.split()


def failure_text(result: CommandResult) -> str:
    output = result.output.strip()
    if output:
        return output
    return f"'{result.display_cmd}' failed with exit code {result.returncode}."


def run_and_show(session: Session, title: str, *args: str, env=None, empty_text: str = NO_OUTPUT) -> CommandResult:
    """Runs git once; shows the output in the viewer on success, in an error dialog otherwise."""
    result = session.run_git(*args, env=env)
    if not result.ok:
        session.dialogs.error(failure_text(result))
    else:
        text = result.output.rstrip("\n")
        session.dialogs.show_text(title, text if text.strip() else empty_text)
    return result


def run_and_notify(session: Session, message: str, *args: str, env=None) -> CommandResult:
    """Runs git once; a short notification on success, the output in an error dialog otherwise."""
    result = session.run_git(*args, env=env)
    if not result.ok:
        session.dialogs.error(failure_text(result))
    else:
        session.dialogs.info(message)
    return result


def run_each(session: Session, items: Iterable[str], build_args, success_message: str) -> List[CommandResult]:
    """Runs one git command per item; failures are collected into a single error dialog."""
    failures = []
    results = []
    for item in items:
        result = session.run_git(*build_args(item))
        results.append(result)
        if not result.ok:
            failures.append(f"{item}: {failure_text(result)}")
    if failures:
        session.dialogs.error("\n\n".join(failures))
    else:
        session.dialogs.info(success_message)
    return results


def confirm_action(session: Session, prompt: str) -> bool:
    return session.dialogs.confirm("Confirm", prompt)


def ensure_clean_or_confirm(session: Session) -> bool:
    """Dirty-tree guard: True if the tree is clean or the user accepts to continue anyway."""
    if not session.git.has_uncommitted_changes(session.repo_path):
        return True
    logging.info(f"Uncommitted changes in {session.repo_path}, asking for confirmation.")
    return confirm_action(session, "There are unsaved changes. Continue anyway?")


def choose_from_log(session: Session, title: str, multiple: bool = False, limit: Optional[int] = None):
    """History picker. Returns a commit hash, or a list of hashes in display order (newest first).

    None when the user cancels or the history cannot be listed.
    """
    limit = limit or session.config["history_limit"]
    result, entries = session.git.log_entries(session.repo_path, limit)
    if not result.ok:
        session.dialogs.error(f"Unable to read the Git log.\n\n{failure_text(result)}")
        return None
    if not entries:
        session.dialogs.error("No commits available.")
        return None

    columns = ["Commit", "Message", "When", "Author"]
    choices = [Choice(e.commit, [e.commit, e.subject, e.when, e.author]) for e in entries]
    if not multiple:
        return session.dialogs.choose_one(title, columns, choices)

    selection = session.dialogs.choose_many(title, columns, choices)
    if selection is None:
        return None
    if not selection:
        session.dialogs.error("No commits selected.")
        return None
    return selection


def choose_branch(session: Session, title: str, include_remote: bool = False) -> Optional[str]:
    """Branch picker over local (and optionally remote-tracking) branches."""
    result, branches = session.git.branches(session.repo_path, include_remote)
    if not result.ok:
        session.dialogs.error(f"Unable to list branches.\n\n{failure_text(result)}")
        return None
    if not branches:
        session.dialogs.error("No branches available.")
        return None
    choices = [Choice(b.name, [b.name, b.short_hash, b.updated]) for b in branches]
    return session.dialogs.choose_one(title, ["Branch", "Commit", "Last update"], choices)


def choose_remote(session: Session, title: str = "Select remote") -> Optional[str]:
    result, remotes = session.git.remotes(session.repo_path)
    if not result.ok:
        session.dialogs.error(failure_text(result))
        return None
    if not remotes:
        session.dialogs.error("No remotes configured.")
        return None
    return session.dialogs.choose_one(title, ["Remote"], [Choice(r, [r]) for r in remotes])


def choose_option(session: Session, title: str, options, columns=("Option", "Description")) -> Optional[str]:
    """Small fixed menu; options is a sequence of (key, label, description)."""
    choices = [Choice(key, [label, description]) for key, label, description in options]
    return session.dialogs.choose_one(title, list(columns), choices)
