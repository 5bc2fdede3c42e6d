# operations/history_ops.py
# -*- coding: utf-8 -*-
"""Operations that rewrite or replay history: reset, revert, cherry-pick and file rollback."""
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice, FormField
from git_toolkit.operations.common import (
    choose_from_log, choose_option, confirm_action, failure_text, run_and_show,
    run_each, split_passthrough
)

RESET_MODES = [
    ("soft", "soft", "Keep index and working tree"),
    ("mixed", "mixed", "Keep working tree, reset index"),
    ("hard", "hard", "Full reset (loses changes)"),
]


def reset_branch(session: Session):
    commit = choose_from_log(session, "Select commit for reset")
    if not commit:
        return
    mode = choose_option(session, "Reset mode", RESET_MODES, columns=("Type", "Description"))
    if mode is None:
        return
    if mode == "hard" and not confirm_action(session, "Hard reset will discard unsaved changes. Continue?"):
        return
    run_and_show(session, f"git reset --{mode}", "reset", f"--{mode}", commit)


def revert_commit(session: Session):
    commits = choose_from_log(session, "Select commits to revert", multiple=True)
    if commits is None:
        return
    options = session.dialogs.ask_form(
        "Revert options", [FormField("Strategy", options=["", "--no-commit"]), FormField("Extra parameters")]
    )
    if options is None:
        return
    strategy, extra = options
    args = ["revert"]
    if strategy:
        args.append(strategy)
    args.extend(split_passthrough(extra))
    args.extend(commits)
    run_and_show(session, "git revert", *args)


def cherry_pick(session: Session):
    commits = choose_from_log(session, "Select commits for cherry-pick", multiple=True)
    if commits is None:
        return
    options = session.dialogs.ask_form("Cherry-pick options", [FormField("Extra parameters (e.g. --no-commit, -x)")])
    if options is None:
        return
    # the picker lists newest first; apply in chronological order
    run_and_show(session, "git cherry-pick", "cherry-pick", *split_passthrough(options[0]), *reversed(commits))


def rollback_files(session: Session):
    commit = choose_from_log(session, "Select reference commit")
    if not commit:
        return
    result, files = session.git.tree_files(session.repo_path, commit)
    if not result.ok or not files:
        detail = f"\n\n{failure_text(result)}" if not result.ok else ""
        session.dialogs.error(f"Unable to retrieve files from the selected commit.{detail}")
        return
    selected = session.dialogs.choose_many("Restore files", ["File"], [Choice(f, [f]) for f in files])
    if selected is None:
        return
    if not selected:
        session.dialogs.error("No files selected.")
        return
    if not confirm_action(session, f"Selected files will be overwritten with content from commit {commit}. Continue?"):
        return
    run_each(
        session, selected, lambda path: ("checkout", commit, "--", path),
        f"Files restored from commit {commit}.",
    )
