"""
Configuration shared by the script loader, parser and dialogue engine.
"""

from __future__ import annotations


class DialogueConfig:
    """Configuration for compiling and running dialogue scripts."""

    def __init__(
        self,
        encoding: str = "utf-8",
        option_separator: str = "; ",
        strict_selection: bool = False,
        warn_unreachable: bool = True,
    ):
        # Encoding used when reading script files
        self.encoding = encoding
        # Joins the choice labels of an option node's content
        self.option_separator = option_separator
        # Reject select() indices outside the open prompt's labels
        self.strict_selection = strict_selection
        # Log a warning for lines following a root-level <END>
        self.warn_unreachable = warn_unreachable

    def __repr__(self) -> str:
        return (
            f"DialogueConfig(encoding={self.encoding!r}, "
            f"option_separator={self.option_separator!r}, "
            f"strict_selection={self.strict_selection}, "
            f"warn_unreachable={self.warn_unreachable})"
        )
