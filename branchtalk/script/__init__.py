"""
Script module - dialogue script compiler.

Provides:
- Line decoding and script loading
- Choice block lookahead
- Parsing into a node graph
- Placeholder splicing (fix-up)
- JSON export/import of compiled graphs
"""

from branchtalk.script.lines import ScriptLine, decode_line, load_script, load_script_file
from branchtalk.script.nodes import DialogueGraph, Node, NodeKind
from branchtalk.script.scanner import ChoiceBlock, BranchLabel, scan_choice_block
from branchtalk.script.fixup import fix_graph
from branchtalk.script.parser import ScriptParser, compile_script, compile_file
from branchtalk.script.export import (
    graph_to_json,
    graph_from_json,
    save_graph_json,
    load_graph_json,
    compile_script_file,
)

__all__ = [
    "ScriptLine",
    "decode_line",
    "load_script",
    "load_script_file",
    "DialogueGraph",
    "Node",
    "NodeKind",
    "ChoiceBlock",
    "BranchLabel",
    "scan_choice_block",
    "fix_graph",
    "ScriptParser",
    "compile_script",
    "compile_file",
    "graph_to_json",
    "graph_from_json",
    "save_graph_json",
    "load_graph_json",
    "compile_script_file",
]
