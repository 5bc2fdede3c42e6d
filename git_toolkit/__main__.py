# __main__.py
import sys

from git_toolkit.main import main

if __name__ == "__main__":
    sys.exit(main())
