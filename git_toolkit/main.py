# main.py
# -*- coding: utf-8 -*-
import os
import sys
import logging
import argparse
from typing import Optional

from git_toolkit import __version__
from git_toolkit.core.config import load_config, repo_list_path, resolve_config_dir
from git_toolkit.core.git_handler import GitHandler
from git_toolkit.core.repo_list import RepositoryList
from git_toolkit.core.session import Session
from git_toolkit.core.temp_files import TempFileManager
from git_toolkit.ui.dialogs import Dialogs
from git_toolkit.ui.dispatcher import Dispatcher
from git_toolkit.ui.selector import RepositorySelector

LOG_FORMAT = '%(asctime)s - [%(levelname)s] - %(module)s:%(lineno)d - %(message)s'


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="git-toolkit",
        description="Menu-driven dialogs for everyday Git operations.",
    )
    parser.add_argument("--config-dir", help="Directory for the saved repository list and settings")
    parser.add_argument("--repo", help="Open this repository directly instead of showing the selector")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def apply_log_level(level_name: str):
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        logging.warning(f"Unknown log level '{level_name}', keeping INFO.")
        return
    logging.getLogger().setLevel(level)


def fatal(message: str) -> int:
    logging.critical(message)
    print(message, file=sys.stderr)
    return 1


def run_toolkit(config: dict, config_dir: str, git: GitHandler, dialogs: Dialogs,
                repo_arg: Optional[str] = None) -> int:
    """Selector, then the main menu loop. Returns the process exit code."""
    temp_files = TempFileManager(config_dir)
    temp_files.install()

    repo_list = RepositoryList(repo_list_path(config_dir))
    selector = RepositorySelector(repo_list, git, dialogs)

    repo_path = None
    if repo_arg:
        candidate = os.path.abspath(os.path.expanduser(repo_arg))
        if selector.validate(candidate):
            if not repo_list.add(candidate):
                dialogs.error(f"Could not update the repository list:\n{repo_list.list_path}")
            repo_path = candidate
    if repo_path is None:
        repo_path = selector.select()
    if repo_path is None:
        logging.info("No repository selected, exiting.")
        return 0

    session = Session(repo_path, git, dialogs, config, temp_files)
    Dispatcher(session, selector).run()
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    logging.info("Application starting...")

    try:
        config_dir = resolve_config_dir(args.config_dir)
    except OSError as e:
        return fatal(f"Cannot create the configuration directory: {e}")
    config = load_config(config_dir)
    if not args.verbose:
        apply_log_level(config["log_level"])

    git = GitHandler(config["git_executable"])
    if not git.is_available():
        return fatal(f"This toolkit requires Git: '{config['git_executable']}' was not found on PATH.")

    try:
        from PyQt6.QtWidgets import QApplication
        from git_toolkit.ui.qt_dialogs import QtDialogs
    except ImportError as e:
        return fatal(f"This toolkit requires PyQt6 for its dialogs: {e}")

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Git Toolkit")
    app.setApplicationVersion(__version__)

    try:
        exit_code = run_toolkit(config, config_dir, git, QtDialogs(), args.repo)
    except Exception:
        logging.critical("Toolkit stopped by an unexpected error.", exc_info=True)
        return 1
    logging.info(f"Exiting with code {exit_code}.")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
