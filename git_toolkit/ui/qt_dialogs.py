# ui/qt_dialogs.py
# -*- coding: utf-8 -*-
import os
import logging
from typing import List, Optional, Sequence

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLabel, QLineEdit, QTextEdit, QPlainTextEdit,
    QComboBox, QDialogButtonBox, QTableWidget, QTableWidgetItem, QAbstractItemView,
    QHeaderView, QMessageBox, QInputDialog, QFileDialog
)
from PyQt6.QtGui import QFont
from PyQt6.QtCore import Qt

from git_toolkit.ui.dialogs import Choice, Dialogs, FormField

APP_TITLE = "Git Toolkit"
KEY_ROLE = Qt.ItemDataRole.UserRole


class ListSelectionDialog(QDialog):
    """Table of choices with a hidden key; single selection or a checklist."""

    def __init__(self, title: str, columns: Sequence[str], choices: Sequence[Choice],
                 text: str = "", multiple: bool = False, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.resize(820, 480)
        self._multiple = multiple

        layout = QVBoxLayout(self)
        layout.setContentsMargins(15, 15, 15, 15)
        layout.setSpacing(10)

        if text:
            label = QLabel(text)
            label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            layout.addWidget(label)

        self.table = QTableWidget(len(choices), len(columns))
        self.table.setHorizontalHeaderLabels(list(columns))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setStretchLastSection(True)

        for row, choice in enumerate(choices):
            for col in range(len(columns)):
                value = choice.cells[col] if col < len(choice.cells) else ""
                item = QTableWidgetItem(value)
                if col == 0:
                    item.setData(KEY_ROLE, choice.key)
                    if multiple:
                        # indicator only; clicks are handled by _toggle_row
                        item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsUserCheckable)
                        item.setCheckState(Qt.CheckState.Unchecked)
                self.table.setItem(row, col, item)

        if not multiple and choices:
            self.table.selectRow(0)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        if multiple:
            # toggling via click on any cell of the row
            self.table.cellClicked.connect(self._toggle_row)
        else:
            self.table.cellDoubleClicked.connect(lambda row, col: self.accept())

        layout.addWidget(self.table)
        layout.addWidget(button_box)

    def _toggle_row(self, row: int, col: int):
        item = self.table.item(row, 0)
        checked = item.checkState() == Qt.CheckState.Checked
        item.setCheckState(Qt.CheckState.Unchecked if checked else Qt.CheckState.Checked)

    def selected_key(self) -> Optional[str]:
        row = self.table.currentRow()
        if row < 0:
            return None
        return self.table.item(row, 0).data(KEY_ROLE)

    def checked_keys(self) -> List[str]:
        keys = []
        for row in range(self.table.rowCount()):
            item = self.table.item(row, 0)
            if item.checkState() == Qt.CheckState.Checked:
                keys.append(item.data(KEY_ROLE))
        return keys


class FormDialog(QDialog):
    """Small form of labelled entries and combo boxes."""

    def __init__(self, title: str, fields: Sequence[FormField], text: str = "", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(450)

        layout = QFormLayout(self)
        if text:
            layout.addRow(QLabel(text))

        self._editors = []
        for form_field in fields:
            if form_field.options:
                editor = QComboBox()
                editor.addItems(form_field.options)
            elif form_field.multiline:
                editor = QTextEdit()
                editor.setAcceptRichText(False)
                editor.setMaximumHeight(140)
            else:
                editor = QLineEdit()
            layout.addRow(form_field.label + ":", editor)
            self._editors.append(editor)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addRow(button_box)

    def values(self) -> List[str]:
        values = []
        for editor in self._editors:
            if isinstance(editor, QComboBox):
                values.append(editor.currentText())
            elif isinstance(editor, QTextEdit):
                values.append(editor.toPlainText())
            else:
                values.append(editor.text().strip())
        return values


class TextViewerDialog(QDialog):
    """Read-only monospace viewer for command output."""

    def __init__(self, title: str, text: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(900, 600)

        layout = QVBoxLayout(self)
        viewer = QPlainTextEdit()
        viewer.setReadOnly(True)
        viewer.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        font = QFont("Monospace")
        font.setStyleHint(QFont.StyleHint.TypeWriter)
        viewer.setFont(font)
        viewer.setPlainText(text)
        layout.addWidget(viewer)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)


class QtDialogs(Dialogs):
    """Dialogs implemented with modal PyQt6 widgets; needs a QApplication instance."""

    def __init__(self, parent=None):
        self.parent = parent
        self._last_dir = os.path.expanduser("~")

    def choose_one(self, title, columns, choices, text=""):
        dialog = ListSelectionDialog(title, columns, choices, text, multiple=False, parent=self.parent)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return None
        return dialog.selected_key()

    def choose_many(self, title, columns, choices, text=""):
        dialog = ListSelectionDialog(title, columns, choices, text, multiple=True, parent=self.parent)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return None
        return dialog.checked_keys()

    def ask_text(self, title, label, default=""):
        value, ok = QInputDialog.getText(self.parent, title, label, QLineEdit.EchoMode.Normal, default)
        if not ok:
            return None
        return value.strip()

    def ask_form(self, title, fields, text=""):
        dialog = FormDialog(title, fields, text, parent=self.parent)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return None
        return dialog.values()

    def confirm(self, title, text):
        reply = QMessageBox.question(
            self.parent, title, text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def error(self, text):
        logging.debug(f"Error dialog: {text}")
        QMessageBox.critical(self.parent, "Error", text)

    def info(self, text):
        QMessageBox.information(self.parent, APP_TITLE, text)

    def show_text(self, title, text):
        TextViewerDialog(title, text, parent=self.parent).exec()

    def browse_directory(self, title):
        dir_path = QFileDialog.getExistingDirectory(self.parent, title, self._last_dir, QFileDialog.Option.ShowDirsOnly)
        if not dir_path:
            return None
        self._last_dir = os.path.dirname(dir_path) or dir_path
        return dir_path
