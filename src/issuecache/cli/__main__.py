"""
CLI entry point for issuecache.

This module serves as the entry point when issuecache.cli is executed as a module
with `python -m issuecache.cli`.
"""

from .main import main

if __name__ == "__main__":
    main()
