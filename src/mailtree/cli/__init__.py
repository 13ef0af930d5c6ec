#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/cli/__init__.py
"""Command-line interface for mailtree.

Render a template to email HTML::

    $ mailtree render welcome.json --payload user.json -o welcome.html

Render the plain-text part, keeping placeholders for missing values::

    $ mailtree render welcome.json --format text --placeholder-policy bracketed

Check a template and list the variables it needs::

    $ mailtree validate welcome.json
    $ mailtree variables welcome.json --payload user.json

Exit codes: 0 success, 1 unexpected error, 3 invalid options or
configuration, 4 unreadable input or unwritable output, 6 template or data
parsing error, 7 rendering error.
"""

import argparse
import logging
import sys

from mailtree.cli.builder import (
    EXIT_ERROR,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from mailtree.exceptions import MailtreeError
from mailtree.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=parsed_args.rich,
    )


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help(sys.stderr)
        return EXIT_VALIDATION_ERROR

    _setup_logging_level(parsed_args)

    from mailtree.cli.commands import dispatch_command

    try:
        return dispatch_command(parsed_args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except MailtreeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR


__all__ = ["main"]
