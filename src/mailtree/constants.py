#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/constants.py
"""Constants and default values shared across mailtree.

Option defaults live here so the options dataclasses, the CLI and the
documentation agree on a single value.
"""

from __future__ import annotations

from typing import Literal

PlaceholderPolicy = Literal["empty", "bracketed"]
MissingRequiredPolicy = Literal["error", "placeholder"]
OutputTarget = Literal["html", "text"]

PLACEHOLDER_POLICIES: tuple[str, ...] = ("empty", "bracketed")
MISSING_REQUIRED_POLICIES: tuple[str, ...] = ("error", "placeholder")
OUTPUT_TARGETS: tuple[str, ...] = ("html", "text")

# Variables
DEFAULT_REPLACE_VARIABLES = True
DEFAULT_PLACEHOLDER_POLICY: PlaceholderPolicy = "empty"
DEFAULT_MISSING_REQUIRED_POLICY: MissingRequiredPolicy = "error"
DEFAULT_REPEAT_ITEM_KEY = "item"
PLACEHOLDER_OPEN = "{{"
PLACEHOLDER_CLOSE = "}}"
PLACEHOLDER_FALLBACK_PREFIX = ",fallback="

# Preview text (preheader)
DEFAULT_EXTRACT_PREHEADER = False
DEFAULT_PREHEADER_MAX_LENGTH = 150
# Email clients pull body text into the inbox preview when the preheader is
# shorter than this; the shell pads it with invisible characters.
PREVIEW_PADDING_LENGTH = 150
PREVIEW_PADDING_ENTITY = "&nbsp;&zwnj;"

# HTML output
DEFAULT_HTML_STANDALONE = True
DEFAULT_HTML_LANGUAGE = "en"

# Plain text output
DEFAULT_TEXT_INCLUDE_LINK_URLS = True

# Node geometry shared by the renderers
SPACER_HEIGHTS: dict[str, int] = {"sm": 8, "md": 16, "lg": 32, "xl": 64}
DEFAULT_SPACER_HEIGHT = 32
LOGO_SIZES: dict[str, int] = {"sm": 40, "md": 48, "lg": 64}
HEADING_FONT_SIZES: dict[int, str] = {1: "36px", 2: "30px", 3: "24px", 4: "20px", 5: "18px", 6: "16px"}
HEADING_LINE_HEIGHTS: dict[int, str] = {1: "40px", 2: "36px", 3: "38px", 4: "28px", 5: "26px", 6: "24px"}
BUTTON_RADII: dict[str, str] = {"sharp": "0px", "smooth": "6px", "round": "9999px"}
DEFAULT_COLUMNS_GAP = 8

CONFIG_FILENAMES = [".mailtree.toml", ".mailtree.yaml", ".mailtree.yml", ".mailtree.json"]
CONFIG_ENV_VAR = "MAILTREE_CONFIG"
