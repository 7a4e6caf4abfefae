"""
FILE: mdkanban/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - DEFAULT_BOARD_FILE: Board file used when nothing else is configured
  - BOARD_FILE_ENV: Environment variable that overrides the board file
  - DEFAULT_COLUMN: Column new tasks land in from the CLI
  - PRIORITY_NAMES: All valid priority values, highest first
  - DEFAULT_PRIORITY_NAME: Priority of tasks without a Priority tag
  - NOTE_INDENT: Prefix of note continuation lines
  - TAG_ID / TAG_PRIORITY / TAG_COMMENTS: Bracket tag keywords
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Single source of truth for the Markdown grammar keywords
"""

# Board file configuration
DEFAULT_BOARD_FILE = "tasks.md"
BOARD_FILE_ENV = "MDKANBAN_FILE"
DEFAULT_COLUMN = "Todo"
DONE_COLUMN = "done"

# Priority values
PRIORITY_NAMES = ("Highest", "High", "Medium", "Low", "Lowest")
DEFAULT_PRIORITY_NAME = "Medium"

# Markdown grammar
NOTE_INDENT = "    "
COMMENT_SEPARATOR = "|"
TAG_ID = "id"
TAG_PRIORITY = "Priority"
TAG_COMMENTS = "Comments"
