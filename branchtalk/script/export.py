"""
Compiled graph serialization.

Writes canonical graphs to JSON so a game can ship compiled dialogue, and
reads them back with schema validation:

```
{
  "version": 1,
  "root": 0,
  "nodes": [
    {"id": 0, "kind": "start", "name": "", "content": "", "next": [1], "line": null},
    {"id": 1, "kind": "scene", "name": "", "content": "Forest", "next": [2], "line": 1},
    ...
  ]
}
```
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema

from branchtalk.core.config import DialogueConfig
from branchtalk.core.errors import GraphFormatError
from branchtalk.script.nodes import DialogueGraph, Node, NodeKind, parse_branch_pairs
from branchtalk.script.parser import compile_file

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

GRAPH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["version", "root", "nodes"],
    "properties": {
        "version": {"const": FORMAT_VERSION},
        "root": {"type": "integer", "minimum": 0},
        "nodes": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["id", "kind", "next"],
                "properties": {
                    "id": {"type": "integer", "minimum": 0},
                    "kind": {
                        "enum": [
                            kind.value for kind in NodeKind if not kind.is_placeholder
                        ],
                    },
                    "name": {"type": "string"},
                    "content": {"type": "string"},
                    "next": {
                        "type": "array",
                        "items": {"type": "integer", "minimum": 0},
                    },
                    "line": {"type": ["integer", "null"]},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}


def graph_to_json(graph: DialogueGraph) -> dict:
    """Convert the reachable part of a graph to JSON data, root first."""
    order = list(graph.reachable())
    new_ids = {old: new for new, old in enumerate(order)}
    return {
        'version': FORMAT_VERSION,
        'root': 0,
        'nodes': [
            {
                'id': new_ids[old],
                'kind': graph[old].kind.value,
                'name': graph[old].name,
                'content': graph[old].content,
                'next': [new_ids[child] for child in graph[old].children],
                'line': graph[old].line_number,
            }
            for old in order
        ],
    }


def graph_from_json(data: dict) -> DialogueGraph:
    """
    Rebuild a graph from JSON data.

    Raises:
        GraphFormatError: if the data does not match the schema, refers to
            nodes that do not exist, or has a choice node whose branch pairs
            cannot be decoded
    """
    try:
        jsonschema.validate(instance=data, schema=GRAPH_SCHEMA)
    except jsonschema.ValidationError as e:
        raise GraphFormatError(f"Invalid dialogue graph: {e.message}") from e

    entries = sorted(data['nodes'], key=lambda entry: entry['id'])
    if [entry['id'] for entry in entries] != list(range(len(entries))):
        raise GraphFormatError("Invalid dialogue graph: node ids must be 0..n-1 without gaps")
    if data['root'] >= len(entries):
        raise GraphFormatError(f"Invalid dialogue graph: root {data['root']} does not exist")

    graph = DialogueGraph(root=data['root'])
    for entry in entries:
        for child in entry['next']:
            if child >= len(entries):
                raise GraphFormatError(
                    f"Invalid dialogue graph: node {entry['id']} points to missing node {child}"
                )
        if entry['kind'] == NodeKind.CHOICE.value:
            try:
                parse_branch_pairs(entry.get('content', ''))
            except ValueError as e:
                raise GraphFormatError(
                    f"Invalid dialogue graph: choice node {entry['id']}: {e}"
                ) from e
        graph.nodes.append(Node(
            kind=NodeKind(entry['kind']),
            name=entry.get('name', ''),
            content=entry.get('content', ''),
            children=list(entry['next']),
            line_number=entry.get('line'),
        ))
    return graph


def save_graph_json(graph: DialogueGraph, path: str | Path) -> None:
    """Save a compiled graph as JSON."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(graph_to_json(graph), f, indent=2)


def load_graph_json(path: str | Path) -> DialogueGraph:
    """Load and validate a compiled graph."""
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphFormatError(f"Invalid dialogue graph {path}: {e}") from e
    graph = graph_from_json(data)
    logger.debug(f"Loaded {len(graph)} nodes from {path}")
    return graph


def compile_script_file(
    input_path: str | Path,
    output_path: Optional[str | Path] = None,
    config: Optional[DialogueConfig] = None,
) -> Path:
    """
    Compile a dialogue script to JSON.

    Args:
        input_path: Path to the script file
        output_path: Path to output .json file (default: same name with .json)

    Returns:
        The path written
    """
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.with_suffix('.json')
    else:
        output_path = Path(output_path)

    graph = compile_file(input_path, config)
    save_graph_json(graph, output_path)
    logger.info(f"Compiled {input_path} -> {output_path}")
    return output_path
