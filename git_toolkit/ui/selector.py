# ui/selector.py
# -*- coding: utf-8 -*-
import os
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from git_toolkit.core.git_handler import GitHandler
from git_toolkit.core.repo_list import RepositoryList
from git_toolkit.ui.dialogs import Choice, Dialogs

# action keys cannot collide with saved paths, which are absolute
BROWSE_KEY = ":browse"
MANAGE_KEY = ":manage"
QUIT_KEY = ":quit"

INVALID_REPO_MESSAGE = "The selected path is not a valid Git repository."


class RepoState(enum.Enum):
    OPEN = "Open"
    REMOVE_MISSING = "Remove-MissingPath"
    REMOVE_INVALID = "Remove-Invalid"


@dataclass
class RepoEntry:
    path: str
    state: RepoState
    note: str


@dataclass
class Reconciliation:
    """Display classification of the saved list plus the entries that should be pruned."""
    entries: List[RepoEntry] = field(default_factory=list)
    prune: List[str] = field(default_factory=list)

    def find(self, path: str) -> Optional[RepoEntry]:
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None


def classify(path: str, git: GitHandler) -> RepoEntry:
    if not os.path.isdir(path):
        return RepoEntry(path, RepoState.REMOVE_MISSING, "Path not found (will be removed automatically)")
    if not git.is_valid_repo(path):
        return RepoEntry(path, RepoState.REMOVE_INVALID, "Not a valid Git repository (will be removed)")
    return RepoEntry(path, RepoState.OPEN, f"Current branch: {git.current_branch(path)}")


def reconcile(paths: Sequence[str], git: GitHandler) -> Reconciliation:
    """Classifies every saved path without touching the list file."""
    result = Reconciliation()
    for path in paths:
        entry = classify(path, git)
        result.entries.append(entry)
        if entry.state is not RepoState.OPEN:
            result.prune.append(path)
    return result


class RepositorySelector:
    """List view of saved repositories, with browse and list management screens."""

    def __init__(self, repo_list: RepositoryList, git: GitHandler, dialogs: Dialogs):
        self.repo_list = repo_list
        self.git = git
        self.dialogs = dialogs

    def validate(self, path: str) -> bool:
        if self.git.is_valid_repo(path):
            return True
        logging.warning(f"Rejected repository path: {path}")
        self.dialogs.error(INVALID_REPO_MESSAGE)
        return False

    def _save(self, ok: bool):
        if not ok:
            self.dialogs.error(f"Could not update the repository list:\n{self.repo_list.list_path}")

    def select(self) -> Optional[str]:
        """Runs the list view until a repository is opened. None means the user quit."""
        while True:
            state = reconcile(self.repo_list.load(), self.git)
            choices = [Choice(e.path, [e.path, e.note, e.state.value]) for e in state.entries]
            choices.append(Choice(BROWSE_KEY, ["Browse...", "Pick a repository from the filesystem", "Choose"]))
            choices.append(Choice(MANAGE_KEY, ["Manage list...", "Add or remove saved repositories", "Manage"]))
            choices.append(Choice(QUIT_KEY, ["Quit", "Close the toolkit", "Exit"]))

            selection = self.dialogs.choose_one("Select Git repository", ["Path/Option", "Notes", "Action"], choices)

            if state.prune:
                logging.info(f"Pruning unusable repositories: {state.prune}")
                self._save(self.repo_list.remove_many(state.prune))

            if selection is None or selection == QUIT_KEY:
                return None
            if selection == BROWSE_KEY:
                chosen = self.browse_and_add()
                if chosen:
                    return chosen
                continue
            if selection == MANAGE_KEY:
                self.manage_list()
                continue

            entry = state.find(selection)
            if entry is None:
                continue
            if entry.state is RepoState.REMOVE_MISSING:
                self.dialogs.error(f"Path {entry.path} does not exist: removing it from the list.")
                continue
            if entry.state is RepoState.REMOVE_INVALID:
                self.dialogs.error(f"{INVALID_REPO_MESSAGE}\nRemoving {entry.path} from the list.")
                continue
            # the directory may have changed since the list was rendered
            if not self.validate(entry.path):
                self._save(self.repo_list.remove_many([entry.path]))
                continue
            logging.info(f"Repository selected: {entry.path}")
            return entry.path

    def browse_and_add(self) -> Optional[str]:
        chosen = self.dialogs.browse_directory("Select Git repository folder")
        if not chosen:
            return None
        if not self.validate(chosen):
            return None
        self._save(self.repo_list.add(chosen))
        return chosen

    def manage_list(self):
        operations = [
            Choice("add", ["Add", "Select a new Git repository"]),
            Choice("remove", ["Remove", "Remove one or more saved repositories"]),
            Choice("clear", ["Clear list", "Delete all saved repositories"]),
            Choice("show", ["Show list", "Display current list"]),
            Choice("back", ["Back", "Return to previous screen"]),
        ]
        while True:
            choice = self.dialogs.choose_one("Saved Repository Manager", ["Operation", "Description"], operations)
            if choice is None or choice == "back":
                return

            if choice == "add":
                added = self.browse_and_add()
                if added:
                    self.dialogs.info(f"Repository added to list: {added}")

            elif choice == "remove":
                paths = self.repo_list.load()
                if not paths:
                    self.dialogs.info("No saved repositories to remove.")
                    continue
                selected = self.dialogs.choose_many(
                    "Choose repositories to remove", ["Repository"], [Choice(p, [p]) for p in paths]
                )
                if selected:
                    ok = self.repo_list.remove_many(selected)
                    self._save(ok)
                    if ok:
                        self.dialogs.info("Repositories removed from the list.")

            elif choice == "clear":
                if self.dialogs.confirm("Confirm", "Do you really want to delete all saved repositories?"):
                    ok = self.repo_list.clear()
                    self._save(ok)
                    if ok:
                        self.dialogs.info("List cleared.")

            elif choice == "show":
                paths = self.repo_list.load()
                self.dialogs.show_text("Saved repositories", "\n".join(paths) if paths else "(No saved repositories)")
