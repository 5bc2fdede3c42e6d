"""Tests for scoped message files and their cleanup."""

import os
import signal
import subprocess
import sys
import textwrap
import threading
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from git_toolkit.core import temp_files
from git_toolkit.core.temp_files import TempFileManager

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def manager(tmp_path):
    return TempFileManager(str(tmp_path))


class TestMessageFile:
    def test_file_holds_text_and_is_removed(self, tmp_path, manager):
        with manager.message_file("Subject\n\nBody\n", kind="commit") as path:
            assert path.startswith(str(tmp_path / ".tmp_commit_"))
            with open(path, encoding="utf-8") as f:
                assert f.read() == "Subject\n\nBody\n"
        assert list(tmp_path.iterdir()) == []

    def test_file_is_removed_when_block_raises(self, tmp_path, manager):
        with pytest.raises(RuntimeError):
            with manager.message_file("text"):
                raise RuntimeError("git exploded")
        assert list(tmp_path.iterdir()) == []

    def test_utf8_content(self, manager):
        with manager.message_file("Résumé ✓") as path:
            with open(path, encoding="utf-8") as f:
                assert f.read() == "Résumé ✓"

    def test_cleanup_all_removes_pending_files(self, tmp_path, manager):
        with manager.message_file("text"):
            manager.cleanup_all()
            assert list(tmp_path.iterdir()) == []
        assert list(tmp_path.iterdir()) == []


class TestStartupAndExit:
    def test_purge_stale_removes_only_temporary_files(self, tmp_path, manager):
        (tmp_path / ".tmp_commit_abc").write_text("old", encoding="utf-8")
        (tmp_path / ".tmp_list_xyz").write_text("old", encoding="utf-8")
        (tmp_path / "repos.list").write_text("/a\n", encoding="utf-8")
        manager.purge_stale()
        assert [p.name for p in tmp_path.iterdir()] == ["repos.list"]

    def test_install_registers_exit_hook_once_and_leaves_signals_alone(self, manager):
        with patch.object(temp_files.atexit, "register") as register, \
                patch.object(temp_files.signal, "signal") as set_handler:
            manager.install()
            manager.install()
        register.assert_called_once_with(manager.cleanup_all)
        set_handler.assert_not_called()

    def test_signal_handler_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            temp_files._exit_on_signal(signal.SIGTERM, None)
        assert exc_info.value.code == 128 + signal.SIGTERM


class TestSignalScope:
    """SIGTERM is turned into a clean exit only while a message file exists."""

    def test_handler_active_only_inside_block(self, manager):
        before = signal.getsignal(signal.SIGTERM)
        with manager.message_file("text"):
            assert signal.getsignal(signal.SIGTERM) is temp_files._exit_on_signal
        assert signal.getsignal(signal.SIGTERM) is before

    def test_handler_restored_when_block_raises(self, manager):
        before = signal.getsignal(signal.SIGTERM)
        with pytest.raises(RuntimeError):
            with manager.message_file("text"):
                raise RuntimeError("git exploded")
        assert signal.getsignal(signal.SIGTERM) is before

    def test_worker_thread_leaves_signals_alone(self, manager):
        seen = {}

        def write_message():
            with manager.message_file("text") as path:
                seen["path"] = path
                seen["handler"] = signal.getsignal(signal.SIGTERM)

        before = signal.getsignal(signal.SIGTERM)
        worker = threading.Thread(target=write_message)
        worker.start()
        worker.join()
        assert seen["handler"] is before
        assert not os.path.exists(seen["path"])


def start_child(script, *args):
    env = dict(os.environ, QT_QPA_PLATFORM="offscreen")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    child = subprocess.Popen(
        [sys.executable, "-c", textwrap.dedent(script), *args],
        stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, text=True, env=env,
    )
    assert child.stdout.readline().strip() == "ready"
    return child


def terminate(child):
    time.sleep(0.5)
    child.send_signal(signal.SIGTERM)
    try:
        return child.wait(timeout=10)
    except subprocess.TimeoutExpired:
        child.kill()
        child.wait()
        pytest.fail("process ignored SIGTERM")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
class TestTerminationOfRunningProcess:
    def test_sigterm_kills_process_waiting_in_dialog(self, tmp_path):
        pytest.importorskip("PyQt6.QtWidgets")
        child = start_child("""
            import sys
            from PyQt6.QtWidgets import QApplication
            from git_toolkit.core.temp_files import TempFileManager
            from git_toolkit.ui.qt_dialogs import QtDialogs

            app = QApplication(sys.argv[:1])
            TempFileManager(sys.argv[1]).install()
            print("ready", flush=True)
            QtDialogs().confirm("Confirm", "Continue?")
        """, str(tmp_path))
        assert terminate(child) == -signal.SIGTERM

    def test_sigterm_during_git_removes_message_file(self, tmp_path):
        child = start_child("""
            import sys, signal
            from git_toolkit.core.temp_files import TempFileManager

            manager = TempFileManager(sys.argv[1])
            manager.install()
            with manager.message_file("Subject\\n", kind="commit"):
                print("ready", flush=True)
                signal.pause()
        """, str(tmp_path))
        assert terminate(child) == 128 + signal.SIGTERM
        assert list(tmp_path.glob(".tmp_*")) == []
