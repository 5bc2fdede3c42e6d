# operations/branch_ops.py
# -*- coding: utf-8 -*-
"""Checkout, branch creation, merge and rebase."""
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import FormField
from git_toolkit.operations.common import (
    choose_branch, choose_from_log, choose_option, ensure_clean_or_confirm,
    run_and_show, split_passthrough
)

CHECKOUT_MODES = [
    ("branch", "Existing branch", "Switch to a local or remote branch"),
    ("commit", "Commit", "Checkout a specific commit (detached HEAD)"),
    ("new", "Quick creation", "Create and switch to a new branch"),
]


def checkout_ref(session: Session):
    mode = choose_option(session, "Checkout", CHECKOUT_MODES)
    if mode is None:
        return

    if mode == "branch":
        branch = choose_branch(session, "Choose branch", include_remote=True)
        if not branch:
            return
        if not ensure_clean_or_confirm(session):
            return
        run_and_show(session, "git checkout", "checkout", branch)

    elif mode == "commit":
        commit = choose_from_log(session, "Select commit", limit=session.config["checkout_history_limit"])
        if not commit:
            return
        if not ensure_clean_or_confirm(session):
            return
        run_and_show(session, "Checkout commit", "checkout", commit)

    else:
        values = session.dialogs.ask_form(
            "New branch", [FormField("Branch name"), FormField("Starting point (commit/branch)")]
        )
        if values is None:
            return
        name, start = values
        if not name:
            session.dialogs.error("The branch name is required.")
            return
        args = ["checkout", "-b", name]
        if start:
            args.append(start)
        if not ensure_clean_or_confirm(session):
            return
        run_and_show(session, "New branch", *args)


def create_branch(session: Session):
    values = session.dialogs.ask_form(
        "Create branch", [FormField("Branch name"), FormField("Base (branch/commit)")],
        text="Leave Base blank to use HEAD",
    )
    if values is None:
        return
    name, base = values
    if not name:
        session.dialogs.error("The branch name is required.")
        return
    args = ["branch", name]
    if base:
        args.append(base)
    run_and_show(session, "Branch created", *args, empty_text=f"Branch '{name}' created.")


def merge_branch(session: Session):
    branch = choose_branch(session, "Select branch to merge")
    if not branch:
        return
    if not ensure_clean_or_confirm(session):
        return
    options = session.dialogs.ask_form(
        "Merge options",
        [FormField("Strategy (e.g. ours, recursive)"), FormField("Extra options (e.g. --no-ff)")],
    )
    if options is None:
        return
    strategy, extra = options
    args = ["merge"]
    if strategy:
        args.extend(["-s", strategy])
    args.append(branch)
    args.extend(split_passthrough(extra))
    run_and_show(session, "git merge", *args)


def rebase_branch(session: Session):
    if not ensure_clean_or_confirm(session):
        return
    branch = choose_branch(session, "Choose base branch", include_remote=True)
    if not branch:
        return
    options = session.dialogs.ask_form("Rebase options", [FormField("Extra options (e.g. --autostash)")])
    if options is None:
        return
    run_and_show(session, "git rebase", "rebase", branch, *split_passthrough(options[0]))
