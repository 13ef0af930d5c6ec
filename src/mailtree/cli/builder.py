#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/cli/builder.py
"""Argument parser construction and exit codes for the mailtree CLI."""

import argparse

from mailtree import __version__
from mailtree.constants import OUTPUT_TARGETS, PLACEHOLDER_POLICIES
from mailtree.exceptions import OutputWriteError, ParsingError, RenderingError, ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

# ParsingError stage used when a template or data file cannot be read
FILE_READ_STAGE = "file_read"


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OutputWriteError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        if exception.parsing_stage == FILE_READ_STAGE:
            return EXIT_FILE_ERROR
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    group.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file")
    group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace logging with timestamps and logger names",
    )
    group.add_argument("--rich", action="store_true", help="Use rich formatting for log output")


def _add_render_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("template", help="Template JSON file")
    parser.add_argument("--payload", "-p", metavar="FILE", help="JSON or YAML file with variable values")
    parser.add_argument("--theme", "-t", metavar="FILE", help="JSON or YAML file with a partial theme override")
    parser.add_argument(
        "--format",
        "-f",
        dest="target",
        choices=list(OUTPUT_TARGETS),
        default="html",
        help="Output format (default: html)",
    )
    parser.add_argument("--output", "-o", metavar="PATH", help="Write output to PATH instead of stdout")
    parser.add_argument("--config", "-c", metavar="FILE", help="Configuration file (default: auto-discovered)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    options = parser.add_argument_group("render options")
    options.add_argument(
        "--no-replace",
        dest="replace_variables",
        action="store_const",
        const=False,
        help="Write every variable as its {{name}} placeholder instead of its value",
    )
    options.add_argument(
        "--placeholder-policy",
        choices=list(PLACEHOLDER_POLICIES),
        help="What unresolved optional variables become (default: empty)",
    )
    options.add_argument(
        "--lenient-required",
        dest="missing_required_policy",
        action="store_const",
        const="placeholder",
        help="Write missing required variables as placeholders instead of failing",
    )
    options.add_argument(
        "--max-repeat",
        dest="max_repeat_iterations",
        type=int,
        metavar="N",
        help="Render at most N items per repeat block",
    )
    options.add_argument(
        "--preheader",
        dest="extract_preheader",
        action="store_const",
        const=True,
        help="Extract preview text from the rendered body",
    )
    options.add_argument("--preview-text", metavar="TEXT", help="Explicit preview text (overrides --preheader)")

    html = parser.add_argument_group("html options")
    html.add_argument(
        "--fragment",
        dest="standalone",
        action="store_const",
        const=False,
        help="Output only the body fragment, without the document shell",
    )
    html.add_argument("--title", help="Document <title>")
    html.add_argument("--language", metavar="LANG", help="Document language attribute (default: en)")

    text = parser.add_argument_group("text options")
    text.add_argument(
        "--no-link-urls",
        dest="include_link_urls",
        action="store_const",
        const=False,
        help="Do not append link targets after link text",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser for ``render``, ``validate`` and ``variables``

    """
    parser = argparse.ArgumentParser(
        prog="mailtree",
        description="Render email document trees to HTML and plain text.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    render_parser = subparsers.add_parser("render", help="Render a template to HTML or plain text")
    _add_render_arguments(render_parser)
    _add_logging_arguments(render_parser)

    validate_parser = subparsers.add_parser("validate", help="Check a template's structure")
    validate_parser.add_argument("template", help="Template JSON file")
    _add_logging_arguments(validate_parser)

    variables_parser = subparsers.add_parser("variables", help="List the variables a template refers to")
    variables_parser.add_argument("template", help="Template JSON file")
    variables_parser.add_argument("--payload", "-p", metavar="FILE", help="Show which variables this payload provides")
    variables_parser.add_argument("--json", action="store_true", help="Print a JSON report instead of a table")
    _add_logging_arguments(variables_parser)

    return parser


__all__ = [
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_PARSING_ERROR",
    "EXIT_RENDERING_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
]
