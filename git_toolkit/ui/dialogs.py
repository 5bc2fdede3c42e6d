# ui/dialogs.py
# -*- coding: utf-8 -*-
"""Dialog layer used by the selector, the dispatcher and every operation.

Everything that asks the user something goes through a Dialogs object, so
the menus and handlers never import Qt directly. Cancelling a prompt is
reported as None (or False for confirm), never as an exception.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence


@dataclass
class Choice:
    """One row of a selection list. key is returned to the caller and is not displayed."""
    key: str
    cells: Sequence[str]


@dataclass
class FormField:
    """A form field: free-text entry, or a combo box when options is given."""
    label: str
    options: List[str] = field(default_factory=list)
    multiline: bool = False


class Dialogs:
    """Interface of the dialog presentation layer."""

    def choose_one(self, title: str, columns: Sequence[str], choices: Sequence[Choice],
                   text: str = "") -> Optional[str]:
        """Single selection. Returns the key of the chosen row, None on cancel."""
        raise NotImplementedError

    def choose_many(self, title: str, columns: Sequence[str], choices: Sequence[Choice],
                    text: str = "") -> Optional[List[str]]:
        """Checklist. Returns the checked keys in display order (possibly empty), None on cancel."""
        raise NotImplementedError

    def ask_text(self, title: str, label: str, default: str = "") -> Optional[str]:
        raise NotImplementedError

    def ask_form(self, title: str, fields: Sequence[FormField], text: str = "") -> Optional[List[str]]:
        """Returns one value per field, in order, or None on cancel."""
        raise NotImplementedError

    def confirm(self, title: str, text: str) -> bool:
        raise NotImplementedError

    def error(self, text: str):
        raise NotImplementedError

    def info(self, text: str):
        raise NotImplementedError

    def show_text(self, title: str, text: str):
        """Scrollable read-only viewer."""
        raise NotImplementedError

    def browse_directory(self, title: str) -> Optional[str]:
        raise NotImplementedError
