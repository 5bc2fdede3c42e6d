# core/launcher.py
# -*- coding: utf-8 -*-
import shutil
import subprocess
import logging
from typing import List, Optional, Sequence

# terminals started by open_terminal that have not been reaped yet
_children: List[subprocess.Popen] = []


def find_terminal(candidates: Sequence[Sequence[str]]) -> Optional[List[str]]:
    """Returns the first candidate command whose program is on PATH."""
    for command in candidates:
        if command and shutil.which(command[0]):
            return list(command)
    return None


def reap_finished() -> int:
    """Collects the exit status of terminals that have closed. Returns how many are still running."""
    for process in list(_children):
        code = process.poll()
        if code is not None:
            _children.remove(process)
            logging.debug(f"Terminal PID {process.pid} exited with code {code}")
    return len(_children)


def open_terminal(repo_path: str, candidates: Sequence[Sequence[str]]) -> bool:
    """Starts a terminal emulator with repo_path as working directory, without waiting for it.

    Best effort: returns False when no candidate is installed or it fails to start.
    """
    reap_finished()
    command = find_terminal(candidates)
    if not command:
        logging.warning("No terminal emulator found among the configured candidates.")
        return False

    logging.info(f"Opening terminal in '{repo_path}': {' '.join(command)}")
    try:
        process = subprocess.Popen(
            command,
            cwd=repo_path,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logging.error(f"Could not start terminal '{command[0]}': {e}")
        return False
    _children.append(process)
    logging.info(f"Terminal started, PID {process.pid}")
    return True
