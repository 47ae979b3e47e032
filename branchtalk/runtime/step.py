"""
Steps - the presentation-facing view of dialogue nodes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StepKind(str, Enum):
    """Kinds of step a presentation layer has to render."""
    SCENE = "scene"
    OPTION = "option"
    END = "end"
    PERSON_SAY = "person_say"
    PERSON_THINK = "person_think"


class Step(BaseModel):
    """
    One unit of dialogue returned by DialogueEngine.advance().

    Attributes:
        kind: What to render
        name: Speaker for say/think steps, prompt name for option steps
        content: Line text (scene title for scene steps)
        choices: Labels to offer, only filled for option steps
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: StepKind
    name: str = ""
    content: str = ""
    choices: list[str] = Field(default_factory=list)

    @property
    def is_option(self) -> bool:
        return self.kind is StepKind.OPTION

    def describe(self) -> str:
        """Single-line summary, as printed by `branchtalk play`."""
        return (
            f"type: {self.kind.value} | name: {self.name} | "
            f"content: {self.content} | choices: {' ; '.join(self.choices)}"
        )
