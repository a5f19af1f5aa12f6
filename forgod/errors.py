"""
Exceptions raised for setup problems.

Rule violations during play never raise; they come back as failed
ActionResults.
"""


class ForGodError(Exception):
    """Base class for package errors."""


class GameSetupError(ForGodError, ValueError):
    """The requested game cannot be created (bad roster, bad position)."""
