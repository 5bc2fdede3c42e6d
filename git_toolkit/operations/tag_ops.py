# operations/tag_ops.py
# -*- coding: utf-8 -*-
"""Annotated tag creation and tag deletion."""
from git_toolkit.core.session import Session
from git_toolkit.ui.dialogs import Choice, FormField
from git_toolkit.operations.common import (
    NO_EDITOR_ENV, confirm_action, failure_text, run_and_show, run_each
)


def create_tag(session: Session):
    values = session.dialogs.ask_form(
        "Create tag",
        [FormField("Tag name"), FormField("Reference commit (optional)"), FormField("Annotated message", multiline=True)],
    )
    if values is None:
        return
    name, commit, message = values[0], values[1], values[2].strip()
    if not name:
        session.dialogs.error("The tag name is required.")
        return

    args = ["tag", "-a", name]
    if commit:
        args.append(commit)
    # an annotated tag needs a message; fall back to the tag name
    with session.temp_files.message_file((message or name) + "\n", kind="tag") as message_path:
        run_and_show(session, "Tag created", *args, "-F", message_path, env=NO_EDITOR_ENV,
                     empty_text=f"Tag '{name}' created.")


def delete_tag(session: Session):
    result, tags = session.git.tags(session.repo_path)
    if not result.ok:
        session.dialogs.error(failure_text(result))
        return
    if not tags:
        session.dialogs.info("No tags to delete.")
        return
    selected = session.dialogs.choose_many("Delete tag", ["Tag"], [Choice(t, [t]) for t in tags])
    if selected is None:
        return
    if not selected:
        session.dialogs.error("No tags selected.")
        return
    if not confirm_action(session, "Confirm deletion of selected tags?"):
        return
    run_each(session, selected, lambda tag: ("tag", "-d", tag), "Tags deleted.")
