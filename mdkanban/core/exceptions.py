"""
FILE: mdkanban/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - KanbanError (base exception)
  - SourceColumnNotFoundError
  - InvalidInputError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from KanbanError for easy catching
  - Storage failures are NOT wrapped: they surface as OSError
  - Position-addressed board operations never raise, they no-op
  - Exceptions include context (column, location) for helpful error messages
"""


class KanbanError(Exception):
    """Base exception for all mdkanban errors."""
    pass


class SourceColumnNotFoundError(KanbanError):
    """Transfer source column doesn't exist in the source board."""

    def __init__(self, column: str, location: str):
        self.column = column
        self.location = location
        super().__init__(f'Source column "{column}" not found in {location}')


class InvalidInputError(KanbanError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)
