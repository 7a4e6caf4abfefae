"""
FILE: mdkanban/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    show,
    add,
    done,
    undone,
    toggle,
    rm,
    mv,
    priority,
    transfer,
)
from .comments import (
    comment_add,
    comment_edit,
    comment_rm,
)
from .columns import (
    column_add,
    column_rm,
    column_mv,
)
from .system import (
    version,
)

__all__ = [
    "show",
    "add",
    "done",
    "undone",
    "toggle",
    "rm",
    "mv",
    "priority",
    "transfer",
    "comment_add",
    "comment_edit",
    "comment_rm",
    "column_add",
    "column_rm",
    "column_mv",
    "version",
]
