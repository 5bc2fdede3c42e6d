# core/temp_files.py
# -*- coding: utf-8 -*-
import os
import sys
import glob
import atexit
import signal
import logging
import tempfile
import threading
from contextlib import contextmanager

TEMP_PREFIX = ".tmp_"
EXIT_SIGNALS = ("SIGTERM", "SIGHUP")


class TempFileManager:
    """Creates message files for git in the config directory and guarantees their removal.

    Each file is removed right after use; anything still registered is removed
    by an atexit hook, and leftovers of a killed process are purged on the next
    start. SIGTERM/SIGHUP are turned into a normal exit only while a message
    file exists; the rest of the time they keep their default behaviour, so a
    process blocked in a Qt dialog still dies on them.
    """

    def __init__(self, directory: str):
        self.directory = directory
        self._pending = []
        self._registered = False

    def install(self):
        """Purges stale files and hooks cleanup into interpreter exit."""
        self.purge_stale()
        if not self._registered:
            atexit.register(self.cleanup_all)
            self._registered = True

    def purge_stale(self):
        for path in glob.glob(os.path.join(self.directory, TEMP_PREFIX + "*")):
            try:
                os.remove(path)
                logging.info(f"Removed stale temporary file: {path}")
            except OSError as e:
                logging.warning(f"Could not remove stale temporary file {path}: {e}")

    def cleanup_all(self):
        while self._pending:
            self._remove(self._pending.pop())

    def _remove(self, path):
        if os.path.exists(path):
            try:
                os.remove(path)
                logging.debug(f"Removed temporary file: {path}")
            except OSError as e:
                logging.warning(f"Could not remove temporary file {path}: {e}")

    @contextmanager
    def message_file(self, text: str, kind: str = "msg"):
        """Yields the path of a UTF-8 file holding text; the file is gone when the block exits."""
        os.makedirs(self.directory, exist_ok=True)
        previous = _catch_exit_signals()
        try:
            fd, path = tempfile.mkstemp(prefix=f"{TEMP_PREFIX}{kind}_", dir=self.directory)
            self._pending.append(path)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                yield path
            finally:
                self._remove(path)
                if path in self._pending:
                    self._pending.remove(path)
        finally:
            _restore_signals(previous)


def _catch_exit_signals() -> dict:
    """Routes SIGTERM/SIGHUP to _exit_on_signal; returns the previous handlers."""
    previous = {}
    # signal.signal only works from the main thread
    if threading.current_thread() is not threading.main_thread():
        return previous
    for signame in EXIT_SIGNALS:
        signum = getattr(signal, signame, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, _exit_on_signal)
    return previous


def _restore_signals(previous: dict):
    for signum, handler in previous.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def _exit_on_signal(signum, frame):
    logging.warning(f"Received signal {signum}, exiting.")
    # SystemExit unwinds normally, so finally blocks and atexit hooks run
    sys.exit(128 + signum)
