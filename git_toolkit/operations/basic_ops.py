# operations/basic_ops.py
# -*- coding: utf-8 -*-
"""Status, staging, commit, log and diff."""
import logging

from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice, FormField
from git_toolkit.operations.common import (
    NO_EDITOR_ENV, choose_from_log, choose_option, failure_text, run_and_show, run_each
)


def show_status(session: Session):
    run_and_show(session, "Repository status", "status", "--short", "--branch", empty_text="No changes.")


def _status_or_error(session: Session):
    result, entries = session.git.status_entries(session.repo_path)
    if not result.ok:
        session.dialogs.error(failure_text(result))
        return None
    return entries


def stage_files(session: Session):
    entries = _status_or_error(session)
    if entries is None:
        return
    if not entries:
        session.dialogs.info("No files to stage.")
        return
    choices = [Choice(e.path, [e.code, e.path]) for e in entries]
    selected = session.dialogs.choose_many("Add files to the index", ["Status", "File"], choices)
    if selected is None:
        return
    if not selected:
        session.dialogs.error("No files selected.")
        return
    run_each(session, selected, lambda path: ("add", "--", path), "Files added to the index.")


def unstage_files(session: Session):
    entries = _status_or_error(session)
    if entries is None:
        return
    staged = [e for e in entries if e.staged]
    if not staged:
        session.dialogs.info("No staged files to remove.")
        return
    choices = [Choice(e.path, [e.code, e.path]) for e in staged]
    selected = session.dialogs.choose_many("Remove files from the index", ["Status", "File"], choices)
    if selected is None:
        return
    if not selected:
        session.dialogs.error("No files selected.")
        return
    run_each(session, selected, lambda path: ("reset", "-q", "HEAD", "--", path), "Files removed from the index.")


def commit_changes(session: Session):
    staged = session.run_git("diff", "--cached", "--name-only")
    if not staged.ok:
        session.dialogs.error(failure_text(staged))
        return

    if not staged.output.strip():
        if not session.dialogs.confirm(
            "Empty index",
            "No files are staged. Create a commit including all changes (git commit -am)?",
        ):
            return
        values = session.dialogs.ask_form("Quick commit", [FormField("Commit message")], text="git commit -am")
        if values is None:
            return
        message = values[0].strip()
        if not message:
            session.dialogs.error("The commit message is required.")
            return
        run_and_show(session, "Commit result", "commit", "-am", message)
        return

    values = session.dialogs.ask_form(
        "Create commit",
        [FormField("Subject (required)"), FormField("Multiline description (optional)", multiline=True)],
    )
    if values is None:
        return
    subject, body = values[0].strip(), values[1].strip()
    if not subject:
        session.dialogs.error("The commit subject is required.")
        return

    message = f"{subject}\n\n{body}\n" if body else f"{subject}\n"
    with session.temp_files.message_file(message, kind="commit") as message_path:
        logging.debug(f"Commit message written to {message_path}")
        run_and_show(session, "Commit result", "commit", "-F", message_path, env=NO_EDITOR_ENV)


LOG_MODES = [
    ("graph", "Compact graph", "git log --graph --decorate --oneline"),
    ("full", "Full details", "Recent commits with full messages"),
    ("author", "Filter by author", "Show commits by a specific author"),
    ("search", "Search by keyword", "Filter commits by search term"),
]


def show_log(session: Session):
    mode = choose_option(session, "View log", LOG_MODES, columns=("Mode", "Description"))
    if mode is None:
        return
    graph_limit = str(session.config["graph_log_limit"])

    if mode == "graph":
        args = ["log", "--graph", "--decorate", "--oneline", "-n", graph_limit]
    elif mode == "full":
        args = ["log", "-n", str(session.config["full_log_limit"])]
    elif mode == "author":
        author = session.dialogs.ask_text("Author", "Enter name or email")
        if author is None:
            return
        if not author:
            session.dialogs.error("The author is required.")
            return
        args = ["log", f"--author={author}", "--graph", "--oneline", "-n", graph_limit]
    else:
        term = session.dialogs.ask_text("Filter", "Enter search string")
        if term is None:
            return
        if not term:
            session.dialogs.error("The search string is required.")
            return
        args = ["log", f"--grep={term}", "--graph", "--decorate", "--oneline", "-n", graph_limit]

    run_and_show(session, "Git log", *args, empty_text="No results.")


DIFF_MODES = [
    ("worktree", "Diff working tree", "Compare unstaged changes with the index"),
    ("staged", "Diff staged", "Compare index with HEAD"),
    ("commits", "Diff between commits", "Compare two commits"),
    ("file", "Specific file diff", "Choose a file to compare"),
]


def show_diff(session: Session):
    mode = choose_option(session, "Diff", DIFF_MODES)
    if mode is None:
        return

    if mode == "worktree":
        args = ["diff"]
    elif mode == "staged":
        args = ["diff", "--cached"]
    elif mode == "commits":
        commits = choose_from_log(session, "Select exactly two commits to compare", multiple=True)
        if commits is None:
            return
        if len(commits) != 2:
            session.dialogs.error("Select exactly two commits.")
            return
        # the picker lists newest first: the lower entry is the base
        target, base = commits
        args = ["diff", base, target]
    else:
        path = session.dialogs.ask_text("File", "Relative file path")
        if path is None:
            return
        if not path:
            session.dialogs.error("The file path is required.")
            return
        args = ["diff", "--", path]

    run_and_show(session, "Diff", *args, empty_text="No differences.")
