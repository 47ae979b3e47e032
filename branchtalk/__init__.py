"""
branchtalk

A tag-based scripting language for branching dialogue and the engine that
plays it back.

Quick Start:
    from branchtalk import compile_script, DialogueEngine

    graph = compile_script('''
    <scene>Forest
    <Mira>Hello
    <END>
    ''')
    engine = DialogueEngine(graph)
    step = engine.advance()
    while step is not None:
        print(step.describe())
        step = engine.advance()
"""

__version__ = "0.1.0"

from branchtalk.core import (
    DialogueConfig,
    DialogueError,
    ScriptSyntaxError,
    SequencingError,
    GraphFormatError,
    EventBus,
    Event,
    DialogueEvent,
)
from branchtalk.script import (
    DialogueGraph,
    NodeKind,
    compile_script,
    compile_file,
    graph_to_json,
    graph_from_json,
)
from branchtalk.runtime import DialogueEngine, Step, StepKind, OptionMemory, UNSET

__all__ = [
    # Core
    "DialogueConfig",
    "DialogueError",
    "ScriptSyntaxError",
    "SequencingError",
    "GraphFormatError",
    # Events
    "EventBus",
    "Event",
    "DialogueEvent",
    # Compiler
    "DialogueGraph",
    "NodeKind",
    "compile_script",
    "compile_file",
    "graph_to_json",
    "graph_from_json",
    # Runtime
    "DialogueEngine",
    "Step",
    "StepKind",
    "OptionMemory",
    "UNSET",
]
