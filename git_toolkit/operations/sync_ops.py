# operations/sync_ops.py
# -*- coding: utf-8 -*-
"""Pull, fetch, push and remote management."""
from git_toolkit.core.git_handler import DETACHED_HEAD
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice, FormField
from git_toolkit.operations.common import (
    choose_option, choose_remote, ensure_clean_or_confirm, failure_text,
    run_and_notify, run_and_show, run_each, split_passthrough
)


def _default_branch(session: Session) -> str:
    branch = session.git.current_branch(session.repo_path)
    return "" if branch == DETACHED_HEAD else branch


def _ask_branch(session: Session, title: str, label: str):
    branch = session.dialogs.ask_text(title, label, default=_default_branch(session))
    if branch is None:
        return None
    if not branch:
        session.dialogs.error("Branch is required.")
        return None
    return branch


def pull_changes(session: Session):
    remote = choose_remote(session)
    if not remote:
        return
    branch = _ask_branch(session, "Branch to update", "Specify the branch to update")
    if branch is None:
        return
    if not ensure_clean_or_confirm(session):
        return
    run_and_show(session, "git pull", "pull", remote, branch)


FETCH_MODES = [
    ("remote", "Fetch specific remote", "Download updates from a remote"),
    ("all", "Fetch --all", "Download updates from all remotes"),
]


def fetch_changes(session: Session):
    mode = choose_option(session, "git fetch", FETCH_MODES)
    if mode is None:
        return
    if mode == "all":
        run_and_show(session, "git fetch", "fetch", "--all")
        return
    remote = choose_remote(session)
    if not remote:
        return
    run_and_show(session, "git fetch", "fetch", remote)


def push_changes(session: Session):
    remote = choose_remote(session)
    if not remote:
        return
    branch = _ask_branch(session, "Branch to push", "Specify the branch to push")
    if branch is None:
        return
    options = session.dialogs.ask_form(
        "Push options",
        [FormField("Additional tag options (e.g. --tags)"), FormField("Extra options (e.g. --force-with-lease)")],
        text="Leave empty to use defaults",
    )
    if options is None:
        return
    tag_args = split_passthrough(options[0])
    extra_args = split_passthrough(options[1])
    run_and_show(session, "git push", "push", remote, branch, *tag_args, *extra_args)


REMOTE_OPERATIONS = [
    ("list", "List remotes", "Show configured remotes"),
    ("add", "Add", "Add a new remote"),
    ("remove", "Remove", "Remove a remote"),
    ("set-url", "Edit URL", "Update a remote URL"),
]


def manage_remotes(session: Session):
    operation = choose_option(session, "Remotes", REMOTE_OPERATIONS, columns=("Operation", "Description"))
    if operation is None:
        return

    if operation == "list":
        run_and_show(session, "git remote -v", "remote", "-v", empty_text="No remotes configured.")

    elif operation == "add":
        values = session.dialogs.ask_form("Add remote", [FormField("Name"), FormField("URL")])
        if values is None:
            return
        name, url = values
        if not name or not url:
            session.dialogs.error("Name and URL are required.")
            return
        run_and_notify(session, "Remote added.", "remote", "add", name, url)

    elif operation == "remove":
        result, remotes = session.git.remotes(session.repo_path)
        if not result.ok:
            session.dialogs.error(failure_text(result))
            return
        if not remotes:
            session.dialogs.info("No remotes to remove.")
            return
        selected = session.dialogs.choose_many("Remove remotes", ["Remote"], [Choice(r, [r]) for r in remotes])
        if selected is None:
            return
        if not selected:
            session.dialogs.error("No remotes selected.")
            return
        run_each(session, selected, lambda name: ("remote", "remove", name), "Remotes removed.")

    else:
        remote = choose_remote(session, "Choose remote")
        if not remote:
            return
        url = session.dialogs.ask_text("New URL", f"Enter the new URL for {remote}")
        if url is None:
            return
        if not url:
            session.dialogs.error("The URL is required.")
            return
        run_and_notify(session, "URL updated.", "remote", "set-url", remote, url)
