"""
Runtime module - dialogue traversal.
"""

from branchtalk.runtime.step import Step, StepKind
from branchtalk.runtime.memory import OptionMemory, UNSET
from branchtalk.runtime.engine import DialogueEngine

__all__ = [
    "Step",
    "StepKind",
    "OptionMemory",
    "UNSET",
    "DialogueEngine",
]
