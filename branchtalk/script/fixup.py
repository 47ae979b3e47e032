"""
Fix-up pass - splices placeholder nodes out of a freshly parsed graph.
"""

from __future__ import annotations

import logging

from branchtalk.script.nodes import DialogueGraph, NodeKind, parse_branch_pairs

logger = logging.getLogger(__name__)


def fix_graph(graph: DialogueGraph) -> DialogueGraph:
    """
    Replace every edge to a dead/empty node with that node's own edges.

    Spliced edges are re-checked at the same position before moving on. A
    choice branch that would splice to nothing becomes an end node so pair
    positions still line up with branches. Mutates and returns `graph`.
    """
    visited: set[int] = set()
    pending = [graph.root]
    spliced = 0

    while pending:
        node_id = pending.pop()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = graph[node_id]
        branch_count = len(parse_branch_pairs(node.content)) if node.kind is NodeKind.CHOICE else 0

        i = 0
        while i < len(node.children):
            child = graph[node.children[i]]
            if not child.kind.is_placeholder:
                pending.append(node.children[i])
                i += 1
                continue

            replacement = list(child.children)
            if not replacement and i < branch_count:
                replacement = [graph.add(NodeKind.END, line_number=child.line_number)]
            node.children[i:i + 1] = replacement
            spliced += 1

    logger.debug(f"Fix-up spliced {spliced} placeholder edge(s)")
    return graph
