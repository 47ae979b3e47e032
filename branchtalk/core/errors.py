"""
Error types raised by the compiler and the dialogue engine.
"""

from __future__ import annotations

from typing import Optional


class DialogueError(Exception):
    """Base class for all branchtalk errors."""


class ScriptSyntaxError(DialogueError, ValueError):
    """
    Malformed dialogue script.

    Attributes:
        line_number: 1-based index into the loaded (blank-free) line list
        line: The offending source line, if known
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
            if line is not None:
                message = f"{message} ({line!r})"
        super().__init__(message)


class SequencingError(DialogueError, RuntimeError):
    """advance() called while an option prompt is still waiting for select()."""


class GraphFormatError(DialogueError, ValueError):
    """Serialized dialogue graph failed validation."""
