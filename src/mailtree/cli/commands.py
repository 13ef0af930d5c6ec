#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mailtree/cli/commands.py
"""CLI command handlers for mailtree.

Each handler receives the parsed arguments of its subcommand and returns an
exit code. Library errors propagate to ``mailtree.cli.main``, which maps them
to exit codes.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from mailtree.api import render_html, render_text
from mailtree.ast.nodes import collect_variables, iter_nodes
from mailtree.ast.serialization import load_template
from mailtree.ast.validation import validate_document
from mailtree.cli.builder import EXIT_SUCCESS, FILE_READ_STAGE
from mailtree.cli.config import load_config_with_priority, options_from_config, theme_from_config
from mailtree.constants import CONFIG_ENV_VAR
from mailtree.exceptions import ParsingError, ValidationError
from mailtree.options.base import RenderOptions
from mailtree.options.html import HtmlRendererOptions
from mailtree.options.plaintext import PlainTextRendererOptions
from mailtree.theme import deep_merge
from mailtree.utils.io_utils import write_content
from mailtree.variables import ScopeStack

logger = logging.getLogger(__name__)

_OPTIONS_CLASSES: Dict[str, type[RenderOptions]] = {
    "html": HtmlRendererOptions,
    "text": PlainTextRendererOptions,
}


def load_data_file(path: str, description: str) -> Dict[str, Any]:
    """Load a JSON or YAML object from ``path``.

    Parameters
    ----------
    path : str
        File to read; ``.yaml``/``.yml`` files are read as YAML, anything else
        as JSON
    description : str
        What the file holds, used in error messages (e.g., "payload")

    Returns
    -------
    dict
        Loaded object

    Raises
    ------
    ParsingError
        If the file cannot be read or parsed
    ValidationError
        If the file does not contain an object

    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParsingError(
            f"Could not read {description} file {file_path}: {e}", parsing_stage=FILE_READ_STAGE, original_error=e
        ) from e

    try:
        if file_path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ParsingError(
            f"Invalid {description} file {file_path}: {e}", parsing_stage=f"{description}_parsing", original_error=e
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(
            f"The {description} file must contain an object, got {type(data).__name__}",
            parameter_name=description,
        )
    return data


def _cli_option_names(options_class: type[RenderOptions]) -> set[str]:
    return {
        name
        for name, dataclass_field in options_class.__dataclass_fields__.items()
        if not dataclass_field.metadata.get("exclude_from_cli", False)
    }


def build_options(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> RenderOptions:
    """Build render options from configuration values and CLI flags.

    Flags that were given override configuration values; flags that were
    not given leave them alone.

    Raises
    ------
    ValidationError
        If the combined values are invalid

    """
    options_class = _OPTIONS_CLASSES[parsed_args.target]
    field_names = _cli_option_names(options_class)

    values = options_from_config(config, parsed_args.target, field_names)
    for name in field_names:
        flag_value = getattr(parsed_args, name, None)
        if flag_value is not None:
            values[name] = flag_value

    try:
        return options_class(**values)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid render options: {e}", original_error=e) from e


def handle_render_command(parsed_args: argparse.Namespace) -> int:
    """Render a template and write the result to a file or stdout."""
    config: Dict[str, Any] = {}
    if not parsed_args.no_config:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))

    options = build_options(parsed_args, config)
    payload = load_data_file(parsed_args.payload, "payload") if parsed_args.payload else None

    theme = theme_from_config(config)
    if parsed_args.theme:
        theme = deep_merge(theme, load_data_file(parsed_args.theme, "theme"))

    doc = load_template(parsed_args.template)
    if parsed_args.target == "html":
        content = render_html(doc, payload, theme or None, options).body
    else:
        content = render_text(doc, payload, theme or None, options)

    if parsed_args.output:
        write_content(content, parsed_args.output)
        logger.info("Wrote %s output to %s", parsed_args.target, parsed_args.output)
    else:
        write_content(content, sys.stdout)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
    return EXIT_SUCCESS


def handle_validate_command(parsed_args: argparse.Namespace) -> int:
    """Check that a template loads and satisfies the tree invariants."""
    doc = load_template(parsed_args.template)
    validate_document(doc)
    node_count = sum(1 for _ in iter_nodes(doc))
    print(f"{parsed_args.template}: OK ({node_count} nodes)")
    return EXIT_SUCCESS


def handle_variables_command(parsed_args: argparse.Namespace) -> int:
    """List the variables a template refers to, optionally against a payload."""
    doc = load_template(parsed_args.template)
    names = collect_variables(doc)
    payload = load_data_file(parsed_args.payload, "payload") if parsed_args.payload else None
    scopes = ScopeStack.from_payload(payload) if payload is not None else None

    rows = []
    for name in names:
        provided: Optional[bool] = None
        if scopes is not None:
            found, value = scopes.lookup(name)
            provided = found and value is not None
        rows.append({"name": name, "provided": provided})

    if parsed_args.json:
        print(json.dumps({"variables": rows}, indent=2))
        return EXIT_SUCCESS

    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Variables in {parsed_args.template}")
    table.add_column("Variable", style="cyan", no_wrap=True)
    if scopes is not None:
        table.add_column("Provided", justify="center")
    for row in rows:
        if scopes is not None:
            table.add_row(row["name"], "[green]yes[/green]" if row["provided"] else "[red]no[/red]")
        else:
            table.add_row(row["name"])

    console = Console()
    if rows:
        console.print(table)
    else:
        console.print("No variables referenced.")
    return EXIT_SUCCESS


COMMAND_HANDLERS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "render": handle_render_command,
    "validate": handle_validate_command,
    "variables": handle_variables_command,
}


def dispatch_command(parsed_args: argparse.Namespace) -> int:
    """Run the handler for ``parsed_args.command``."""
    return COMMAND_HANDLERS[parsed_args.command](parsed_args)


__all__ = [
    "COMMAND_HANDLERS",
    "build_options",
    "dispatch_command",
    "handle_render_command",
    "handle_validate_command",
    "handle_variables_command",
    "load_data_file",
]
