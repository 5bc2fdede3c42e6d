# core/repo_list.py
# -*- coding: utf-8 -*-
import os
import logging
import tempfile
from typing import Iterable, List


class RepositoryList:
    """Saved repository paths, one per line in a UTF-8 text file.

    Paths are compared by exact string equality; order of insertion is kept.
    Every mutation rewrites the whole file through a temporary file in the
    same directory followed by os.replace, so a crash never leaves a
    truncated list behind.
    """

    def __init__(self, list_path: str):
        self.list_path = list_path
        self.list_dir = os.path.dirname(os.path.abspath(list_path))

    def load(self) -> List[str]:
        """Returns the saved paths. A missing or unreadable file is an empty list."""
        try:
            with open(self.list_path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logging.error(f"Could not read repository list '{self.list_path}': {e}")
            return []

        paths = []
        for line in lines:
            # tolerate duplicates written by hand or by older versions
            if line and line not in paths:
                paths.append(line)
        return paths

    def _write(self, paths: Iterable[str]) -> bool:
        """Atomically replaces the list file with the given paths."""
        tmp_path = None
        try:
            os.makedirs(self.list_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".tmp_list_", dir=self.list_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for path in paths:
                    f.write(path + "\n")
            os.replace(tmp_path, self.list_path)
            tmp_path = None
            return True
        except OSError as e:
            logging.error(f"Could not write repository list '{self.list_path}': {e}")
            return False
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def add(self, path: str) -> bool:
        """Appends path unless it is already saved. Returns False only on write failure."""
        if not path:
            return True
        paths = self.load()
        if path in paths:
            logging.debug(f"Repository already saved: {path}")
            return True
        paths.append(path)
        if self._write(paths):
            logging.info(f"Repository added to list: {path}")
            return True
        return False

    def remove_many(self, paths_to_remove: Iterable[str]) -> bool:
        """Drops every saved path found in paths_to_remove, keeping the order of the rest."""
        remove_set = {p for p in paths_to_remove if p}
        if not remove_set:
            return True
        paths = self.load()
        survivors = [p for p in paths if p not in remove_set]
        if len(survivors) == len(paths):
            return True
        if self._write(survivors):
            removed = [p for p in paths if p in remove_set]
            logging.info(f"Repositories removed from list: {removed}")
            return True
        return False

    def clear(self) -> bool:
        if self._write([]):
            logging.info("Repository list cleared.")
            return True
        return False
