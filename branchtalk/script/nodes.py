"""
Dialogue graph - node kinds and the node arena.

Nodes live in a single list and refer to their successors by index, so the
fix-up pass can splice edges without touching node objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class NodeKind(str, Enum):
    """Kind tag of a graph node."""
    START = "start"
    SCENE = "scene"
    OPTION = "option"
    END = "end"
    CHOICE = "choice"
    PERSON_SAY = "person_say"
    PERSON_THINK = "person_think"
    # Transient kinds, removed by the fix-up pass
    DEAD = "dead"
    EMPTY = "empty"

    @property
    def is_placeholder(self) -> bool:
        return self in (NodeKind.DEAD, NodeKind.EMPTY)


@dataclass
class Node:
    """
    A single graph node.

    Attributes:
        kind: Node kind
        name: Speaker for say/think, prompt name for option
        content: Line text; joined labels for option; "label,n; ..." for choice
        children: Successor node ids, in order
        line_number: 1-based source line, None for synthetic nodes
    """
    kind: NodeKind = NodeKind.EMPTY
    name: str = ""
    content: str = ""
    children: list[int] = field(default_factory=list)
    line_number: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.kind.value} | {self.name} | {self.content} | {len(self.children)}"


@dataclass
class DialogueGraph:
    """
    Arena of dialogue nodes.

    Attributes:
        nodes: All nodes ever allocated, addressed by index
        root: Id of the synthetic start node
    """
    nodes: list[Node] = field(default_factory=list)
    root: int = 0

    def add(self, kind: NodeKind = NodeKind.EMPTY, **fields) -> int:
        """Allocate a node and return its id."""
        self.nodes.append(Node(kind=kind, **fields))
        return len(self.nodes) - 1

    def __getitem__(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def __len__(self) -> int:
        return len(self.nodes)

    def children(self, node_id: int) -> list[Node]:
        return [self.nodes[child] for child in self.nodes[node_id].children]

    def reachable(self, start: Optional[int] = None) -> Iterator[int]:
        """Yield every node id reachable from start (default: root), once each."""
        pending = [self.root if start is None else start]
        seen: set[int] = set()
        while pending:
            node_id = pending.pop()
            if node_id in seen:
                continue
            seen.add(node_id)
            yield node_id
            # Reverse so siblings come out in order
            pending.extend(reversed(self.nodes[node_id].children))

    def option_names(self) -> list[str]:
        """Names of every option node reachable from the root, in first-seen order."""
        names: list[str] = []
        for node_id in self.reachable():
            node = self.nodes[node_id]
            if node.kind is NodeKind.OPTION and node.name not in names:
                names.append(node.name)
        return names


def parse_branch_pairs(content: str) -> list[tuple[str, int]]:
    """
    Decode a choice node's content ("label,n; label,n") into pairs.

    Raises:
        ValueError: if a part is not a name and an integer separated by ','
    """
    pairs: list[tuple[str, int]] = []
    for part in content.split(';'):
        if not part.strip():
            continue
        label, comma, threshold = part.rpartition(',')
        if not comma or not label.strip():
            raise ValueError(f"Invalid branch pair '{part.strip()}'")
        pairs.append((label.strip(), int(threshold.strip())))
    return pairs


def format_branch_pairs(pairs: list[tuple[str, int]]) -> str:
    return "; ".join(f"{label},{threshold}" for label, threshold in pairs)
