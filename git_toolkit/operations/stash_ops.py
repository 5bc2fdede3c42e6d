# operations/stash_ops.py
# -*- coding: utf-8 -*-
"""Stash save, apply/pop/drop and listing."""
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice, FormField
from git_toolkit.operations.common import choose_option, failure_text, run_and_show

STASH_OPTIONS = ["", "--include-untracked", "--all"]

STASH_ACTIONS = [
    ("apply", "apply", "Apply stash"),
    ("pop", "pop", "Apply stash and drop it"),
    ("drop", "drop", "Drop stash"),
]


def stash_save(session: Session):
    values = session.dialogs.ask_form(
        "Stash", [FormField("Description message"), FormField("Options", options=STASH_OPTIONS)]
    )
    if values is None:
        return
    message, option = values
    args = ["stash", "push"]
    if option:
        args.append(option)
    if message:
        args.extend(["-m", message])
    run_and_show(session, "git stash push", *args)


def stash_apply(session: Session):
    result, stashes = session.git.stashes(session.repo_path)
    if not result.ok:
        session.dialogs.error(failure_text(result))
        return
    if not stashes:
        session.dialogs.info("No stashes available.")
        return
    selection = session.dialogs.choose_one(
        "Apply stash", ["Stash", "Description"], [Choice(ref, [ref, desc]) for ref, desc in stashes]
    )
    if not selection:
        return
    action = choose_option(session, "Action", STASH_ACTIONS, columns=("Operation", "Description"))
    if action is None:
        return
    run_and_show(session, f"git stash {action}", "stash", action, selection)


def stash_list(session: Session):
    run_and_show(session, "Available stashes", "stash", "list", empty_text="No stashes present.")
