#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mailtree CLI.

This module finds a configuration file, loads it from TOML, YAML or JSON
and turns it into option values for the renderers.

Layout of a configuration file (TOML shown)::

    placeholder_policy = "bracketed"
    max_repeat_iterations = 50

    [html]
    language = "de"

    [text]
    include_link_urls = false

    [theme.button]
    backgroundColor = "#0f172a"

Top-level keys are shared ``RenderOptions`` fields, ``[html]`` and
``[text]`` hold format-specific fields, and ``[theme]`` is a partial theme
override. Keys may use dashes instead of underscores.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mailtree.constants import CONFIG_FILENAMES

logger = logging.getLogger(__name__)

FORMAT_SECTIONS = ("html", "text")
THEME_SECTION = "theme"


def _load_pyproject_mailtree_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mailtree]`` section from a pyproject.toml file.

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("mailtree")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.mailtree] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root. In each directory the
    dedicated files are checked first (``.mailtree.toml``, ``.mailtree.yaml``,
    ``.mailtree.yml``, ``.mailtree.json``), then a ``pyproject.toml`` that
    has a ``[tool.mailtree]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_mailtree_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                logger.debug("Skipping unreadable %s", pyproject_path)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_mailtree_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MAILTREE_CONFIG)
    3. Auto-discovered config file (cwd and its parents)

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)

    discovered = find_config_in_parents()
    if discovered:
        logger.debug("Using configuration file %s", discovered)
        return load_config_file(discovered)
    return {}


def _normalize_keys(values: Dict[str, Any]) -> Dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in values.items()}


def options_from_config(config: Dict[str, Any], target: str, field_names: set[str]) -> Dict[str, Any]:
    """Extract option values for one output target from a loaded config.

    Parameters
    ----------
    config : dict
        Loaded configuration
    target : {"html", "text"}
        Output target whose section applies
    field_names : set of str
        Fields of the target's options class

    Returns
    -------
    dict
        Option values; the target section wins over top-level keys

    Raises
    ------
    argparse.ArgumentTypeError
        If a format section is not a table

    """
    values: Dict[str, Any] = {}
    for key, value in _normalize_keys(config).items():
        if key in FORMAT_SECTIONS or key == THEME_SECTION:
            continue
        if key in field_names:
            values[key] = value
        else:
            logger.warning("Ignoring unknown configuration key '%s'", key)

    section = config.get(target, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(f"[{target}] configuration section must be a table")
    for key, value in _normalize_keys(section).items():
        if key in field_names:
            values[key] = value
        else:
            logger.warning("Ignoring unknown [%s] configuration key '%s'", target, key)
    return values


def theme_from_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return the ``[theme]`` override of a loaded config, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the section is not a table

    """
    theme = config.get(THEME_SECTION, {})
    if not isinstance(theme, dict):
        raise argparse.ArgumentTypeError("[theme] configuration section must be a table")
    return theme
