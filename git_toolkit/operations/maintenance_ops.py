# operations/maintenance_ops.py
# -*- coding: utf-8 -*-
"""Submodules, bisect, configuration, clean, notes and the terminal launcher."""
from git_toolkit.core import launcher
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import FormField
from git_toolkit.operations.common import (
    choose_from_log, choose_option, confirm_action, run_and_notify, run_and_show
)

SUBMODULE_OPERATIONS = [
    ("init", "init", "Initialize submodules"),
    ("update", "update", "Update submodules"),
    ("status", "status", "Show submodule status"),
    ("sync", "sync", "Synchronize submodule URLs"),
]


def manage_submodules(session: Session):
    operation = choose_option(session, "Submodule", SUBMODULE_OPERATIONS, columns=("Operation", "Description"))
    if operation is None:
        return
    if operation == "init":
        # `submodule init` has no --recursive; update --init covers nested submodules
        args = ["submodule", "update", "--init", "--recursive"]
    else:
        args = ["submodule", operation, "--recursive"]
    run_and_show(session, f"git submodule {operation}", *args)


BISECT_OPERATIONS = [
    ("start", "start", "Start a bisect session"),
    ("good", "good", "Mark good commit"),
    ("bad", "bad", "Mark bad commit"),
    ("skip", "skip", "Skip commit"),
    ("reset", "reset", "End bisect"),
    ("log", "log", "Show bisect status"),
]

BISECT_MARK_LABELS = {
    "good": "Good commit (blank = HEAD)",
    "bad": "Bad commit (blank = HEAD)",
    "skip": "Commit to skip (blank = HEAD)",
}


def manage_bisect(session: Session):
    operation = choose_option(session, "Git bisect", BISECT_OPERATIONS, columns=("Operation", "Description"))
    if operation is None:
        return

    if operation == "start":
        values = session.dialogs.ask_form("git bisect start", [FormField("Bad commit"), FormField("Good commit")])
        if values is None:
            return
        bad, good = values
        if not bad:
            session.dialogs.error("The bad commit is required.")
            return
        args = ["bisect", "start", bad]
        if good:
            args.append(good)
    elif operation in BISECT_MARK_LABELS:
        commit = session.dialogs.ask_text(f"git bisect {operation}", BISECT_MARK_LABELS[operation])
        if commit is None:
            return
        args = ["bisect", operation]
        if commit:
            args.append(commit)
    else:
        args = ["bisect", operation]

    run_and_show(session, f"git bisect {operation}", *args)


CONFIG_OPERATIONS = [
    ("show", "Show local configuration", "git config --list"),
    ("set", "Set key", "Define a configuration key"),
    ("unset", "Remove key", "Delete a configuration key"),
]


def manage_config(session: Session):
    operation = choose_option(session, "Git configuration", CONFIG_OPERATIONS)
    if operation is None:
        return

    if operation == "show":
        run_and_show(session, "Repository configuration", "config", "--list")

    elif operation == "set":
        values = session.dialogs.ask_form("git config", [FormField("Key (e.g. user.email)"), FormField("Value")])
        if values is None:
            return
        key, value = values
        if not key:
            session.dialogs.error("The key is required.")
            return
        run_and_notify(session, "Configuration updated.", "config", key, value)

    else:
        key = session.dialogs.ask_text("git config --unset", "Key to remove")
        if key is None:
            return
        if not key:
            session.dialogs.error("The key is required.")
            return
        run_and_notify(session, "Key removed.", "config", "--unset", key)


CLEAN_MODES = [
    ("dry-run", "--dry-run", "Show what would be removed"),
    ("force", "-fd", "Remove untracked files and directories"),
]


def clean_worktree(session: Session):
    mode = choose_option(session, "git clean", CLEAN_MODES)
    if mode is None:
        return
    if mode == "dry-run":
        run_and_show(session, "git clean --dry-run", "clean", "-fd", "--dry-run", empty_text="Nothing to remove.")
        return
    if not confirm_action(session, "All untracked files will be deleted. Continue?"):
        return
    run_and_show(session, "git clean", "clean", "-fd", empty_text="Nothing to remove.")


NOTES_OPERATIONS = [
    ("list", "Show notes", "View saved notes"),
    ("add", "Add note", "Add or edit a commit note"),
    ("remove", "Remove note", "Delete a commit note"),
]


def manage_notes(session: Session):
    operation = choose_option(session, "Git notes", NOTES_OPERATIONS, columns=("Operation", "Description"))
    if operation is None:
        return

    if operation == "list":
        run_and_show(session, "git notes list", "notes", "list", empty_text="No notes available.")
        return

    commit = choose_from_log(session, "Select commit")
    if not commit:
        return
    if operation == "add":
        content = session.dialogs.ask_text("Notes", "Note text")
        if content is None:
            return
        if not content:
            session.dialogs.error("The note text is required.")
            return
        # -f replaces an existing note, matching "add or edit"
        run_and_notify(session, f"Note added to commit {commit}.", "notes", "add", "-f", "-m", content, commit)
    else:
        run_and_notify(session, "Note removed.", "notes", "remove", commit)


def open_terminal(session: Session):
    if not launcher.open_terminal(session.repo_path, session.config["terminal_commands"]):
        session.dialogs.error(f"No graphical terminal found. Open one manually in {session.repo_path}.")
