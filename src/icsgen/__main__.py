"""Entry point for running icsgen as a module.

Usage: python -m icsgen [OPTIONS_FILE] [--out PATH]
"""

import logging

from icsgen.config.constants import LOG_FORMAT
from icsgen.config.settings import RuntimeConfig


def main():
    """Main entry point for the command line tool."""
    # Logs go to stderr; stdout carries the document
    runtime = RuntimeConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, runtime.log_level, logging.WARNING),
        format=LOG_FORMAT,
    )

    from icsgen.cli import app
    app()


if __name__ == "__main__":
    main()
