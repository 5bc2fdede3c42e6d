# ui/dispatcher.py
# -*- coding: utf-8 -*-
import enum
import logging
from typing import Callable, Dict, Optional

from git_toolkit.core import launcher
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice
from git_toolkit.ui.selector import RepositorySelector
from git_toolkit.operations import (
    basic_ops, branch_ops, history_ops, maintenance_ops, stash_ops, sync_ops, tag_ops
)


class Operation(enum.Enum):
    """Main menu entries, in display order. Value is (label, description)."""
    STATUS = ("Status", "Show repository status")
    STAGE = ("Stage", "Add files to staging")
    UNSTAGE = ("Unstage", "Remove files from staging")
    COMMIT = ("Commit", "Create a new commit")
    PULL = ("Pull", "Integrate updates from the remote")
    FETCH = ("Fetch", "Download updates without merging")
    PUSH = ("Push", "Publish commits to the remote")
    CHECKOUT = ("Checkout", "Switch to branch or commit")
    CREATE_BRANCH = ("Create branch", "Create a new branch")
    MERGE = ("Merge", "Merge another branch into the current one")
    REBASE = ("Rebase", "Apply commits on top of another branch")
    LOG = ("Log", "View history")
    DIFF = ("Diff", "Analyze differences")
    CREATE_TAG = ("Create tag", "Define an annotated tag")
    DELETE_TAG = ("Delete tag", "Remove existing tags")
    STASH_SAVE = ("Save stash", "Stash current changes")
    STASH_MANAGE = ("Manage stash", "Apply or drop stashes")
    STASH_LIST = ("Stash list", "Show available stashes")
    RESET = ("Reset", "Reset branch to a commit")
    REVERT = ("Revert", "Undo commit(s) by creating a new one")
    CHERRY_PICK = ("Cherry-pick", "Apply selected commits")
    ROLLBACK = ("Rollback", "Restore files from a commit")
    SUBMODULES = ("Submodules", "Manage submodules")
    BISECT = ("Bisect", "Diagnose regressions")
    CONFIG = ("Config", "Read or set git configuration")
    CLEAN = ("Clean", "Remove untracked files")
    REMOTES = ("Remotes", "Manage remotes")
    NOTES = ("Notes", "Manage git notes")
    TERMINAL = ("Terminal", "Open a terminal in the repository")
    CHANGE_REPOSITORY = ("Change repository", "Choose another repository")
    QUIT = ("Quit", "Close the toolkit")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


# CHANGE_REPOSITORY and QUIT are handled by the dispatcher loop itself
HANDLERS: Dict[Operation, Callable[[Session], None]] = {
    Operation.STATUS: basic_ops.show_status,
    Operation.STAGE: basic_ops.stage_files,
    Operation.UNSTAGE: basic_ops.unstage_files,
    Operation.COMMIT: basic_ops.commit_changes,
    Operation.PULL: sync_ops.pull_changes,
    Operation.FETCH: sync_ops.fetch_changes,
    Operation.PUSH: sync_ops.push_changes,
    Operation.CHECKOUT: branch_ops.checkout_ref,
    Operation.CREATE_BRANCH: branch_ops.create_branch,
    Operation.MERGE: branch_ops.merge_branch,
    Operation.REBASE: branch_ops.rebase_branch,
    Operation.LOG: basic_ops.show_log,
    Operation.DIFF: basic_ops.show_diff,
    Operation.CREATE_TAG: tag_ops.create_tag,
    Operation.DELETE_TAG: tag_ops.delete_tag,
    Operation.STASH_SAVE: stash_ops.stash_save,
    Operation.STASH_MANAGE: stash_ops.stash_apply,
    Operation.STASH_LIST: stash_ops.stash_list,
    Operation.RESET: history_ops.reset_branch,
    Operation.REVERT: history_ops.revert_commit,
    Operation.CHERRY_PICK: history_ops.cherry_pick,
    Operation.ROLLBACK: history_ops.rollback_files,
    Operation.SUBMODULES: maintenance_ops.manage_submodules,
    Operation.BISECT: maintenance_ops.manage_bisect,
    Operation.CONFIG: maintenance_ops.manage_config,
    Operation.CLEAN: maintenance_ops.clean_worktree,
    Operation.REMOTES: sync_ops.manage_remotes,
    Operation.NOTES: maintenance_ops.manage_notes,
    Operation.TERMINAL: maintenance_ops.open_terminal,
}


def menu_header(session: Session) -> str:
    branch = session.git.current_branch(session.repo_path)
    return f"Repository: {session.repo_path}\nCurrent branch: {branch}"


class Dispatcher:
    """Main menu loop over the operations of one repository at a time."""

    def __init__(self, session: Session, selector: RepositorySelector):
        self.session = session
        self.selector = selector

    def choose_operation(self) -> Optional[Operation]:
        choices = [Choice(op.name, [op.label, op.description]) for op in Operation]
        key = self.session.dialogs.choose_one(
            "Git Toolkit", ["Operation", "Description"], choices, text=menu_header(self.session)
        )
        if key is None:
            return None
        return Operation[key]

    def run_operation(self, operation: Operation):
        handler = HANDLERS[operation]
        logging.info(f"Operation '{operation.label}' on {self.session.repo_path}")
        try:
            handler(self.session)
        except Exception as e:
            # a failing handler must not end the session
            logging.exception(f"Operation '{operation.label}' raised an unexpected error")
            self.session.dialogs.error(f"Unexpected error during '{operation.label}':\n{e}")

    def run(self):
        """Loops until the user quits, either here or from the repository selector."""
        while True:
            launcher.reap_finished()
            operation = self.choose_operation()
            if operation is None or operation is Operation.QUIT:
                logging.info("Quit requested from the main menu.")
                return
            if operation is Operation.CHANGE_REPOSITORY:
                repo_path = self.selector.select()
                if repo_path is None:
                    logging.info("Quit requested from the repository selector.")
                    return
                self.session = self.session.with_repo(repo_path)
                continue
            self.run_operation(operation)
