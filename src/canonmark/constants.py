#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the canonmark library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Formatting Defaults - canonical output style settings
3. Directives - formatter control comments
4. Configuration Files - discovery names
5. Exit Codes - command-line process status
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LinkStyleType = Literal["inline", "reference"]
CodeFenceChar = Literal["`", "~"]
UnorderedMarker = Literal["-", "*", "+"]

# =============================================================================
# Formatting Defaults
# =============================================================================

DEFAULT_LINE_WIDTH = 80
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "~"
DEFAULT_CODE_FENCE_MIN = 4
DEFAULT_UNORDERED_MARKER: UnorderedMarker = "-"
DEFAULT_THEMATIC_BREAK = "*  *  *  *  *"
DEFAULT_LINK_STYLE: LinkStyleType = "inline"
DEFAULT_ESCAPE_SPECIAL = True

# Width of a list marker slot; item content is indented by this per level
LIST_INDENT = "    "
# Extra base indent for lists nested in definition-list details. Details
# content starts at column 2 and a list marker may sit at most 3 columns past it
DESCRIPTION_LIST_INDENT = "    "
# Hanging indent for definition details and footnote bodies
HANGING_INDENT = "    "
# Narrowest table column, enough for a ":-:" alignment marker
MIN_TABLE_COLUMN_WIDTH = 3

# =============================================================================
# Directives
# =============================================================================

DIRECTIVE_PREFIX = "canonmark"
DIRECTIVE_DISABLE_FILE = f"{DIRECTIVE_PREFIX}-disable-file"
DIRECTIVE_DISABLE_NEXT_LINE = f"{DIRECTIVE_PREFIX}-disable-next-line"
DIRECTIVE_DISABLE_NEXT_SECTION = f"{DIRECTIVE_PREFIX}-disable-next-section"
DIRECTIVE_DISABLE = f"{DIRECTIVE_PREFIX}-disable"
DIRECTIVE_ENABLE = f"{DIRECTIVE_PREFIX}-enable"

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_FILENAMES = [".canonmark.toml", ".canonmark.yaml", ".canonmark.yml", ".canonmark.json"]
PYPROJECT_TOOL_SECTION = "canonmark"

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_CHECK_FAILED = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
