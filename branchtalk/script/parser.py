"""
Dialogue script parser - compiles tagged script lines into a dialogue graph.

Script format:

```
<scene>Forest clearing
<Mira>Did you hear that?
<Mira><thinking>It came from the river.
<option>path
<left>Follow the river
<right>Head for the hills
/
<choices>
<path><1>
<Mira>The river, then.
<//>
<path><2>
<Mira>The hills are safer.
<END>
/
<Mira>Let's go.
<END>
```

`<option>` defines a prompt, `<choices>` branches on an earlier prompt's answer
(`<path><1>` is taken when the first label was picked), `<//>` closes a branch
that continues after the block and `<END>` closes one that stops.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from branchtalk.core.config import DialogueConfig
from branchtalk.core.errors import ScriptSyntaxError
from branchtalk.script.fixup import fix_graph
from branchtalk.script.lines import (
    ScriptLine,
    decode_line,
    load_script,
    load_script_file,
    SCENE,
    OPTION,
    CHOICES,
    END,
    DEAD,
    CLOSE,
)
from branchtalk.script.nodes import DialogueGraph, Node, NodeKind, format_branch_pairs
from branchtalk.script.scanner import scan_choice_block

logger = logging.getLogger(__name__)


class ScriptParser:
    """
    Recursive line consumer producing a raw DialogueGraph.

    One instance parses one script. Use parse_full() (or compile_script) to
    get the canonical graph with placeholders spliced out.
    """

    def __init__(
        self,
        source: str | Iterable[str],
        config: Optional[DialogueConfig] = None,
    ):
        self.config = config or DialogueConfig()
        self.source = load_script(source)
        if not self.source:
            raise ScriptSyntaxError("script is empty")

        self.lines: list[ScriptLine] = [
            decode_line(text, number) for number, text in enumerate(self.source, start=1)
        ]
        self.graph = DialogueGraph()
        # Option names defined so far; two-tag lines starting with one are skipped
        self.option_names: set[str] = set()

        self._cursor = 0
        # One list of loose ends per choices block being parsed
        self._loose_stack: list[list[int]] = []
        self._parsed = False

    def parse(self) -> DialogueGraph:
        """Build the raw graph, placeholders included."""
        if self._parsed:
            return self.graph
        self._parsed = True

        root = self.graph.add(NodeKind.START)
        self.graph.root = root
        first = self._parse_sequence()
        self.graph[root].children.append(first)

        remaining = len(self.lines) - self._cursor
        if remaining and self.config.warn_unreachable:
            logger.warning(
                f"{remaining} line(s) after line {self._cursor} are unreachable"
            )
        return self.graph

    def parse_full(self) -> DialogueGraph:
        """Build the graph and run the fix-up pass."""
        graph = fix_graph(self.parse())
        logger.info(
            f"Compiled {len(self.lines)} lines into "
            f"{sum(1 for _ in graph.reachable())} nodes "
            f"({len(self.option_names)} options)"
        )
        return graph

    def _parse_sequence(self) -> int:
        """
        Parse nodes until <END>, <//> or end of input.

        Returns the id of the sequence's first node.
        """
        head = self.graph.add()
        current = head
        # Loose ends of the last choices block, waiting for the next node
        pending: list[int] = []

        while self._cursor < len(self.lines):
            index = self._cursor
            line = self.lines[index]
            node = self.graph[current]
            node.line_number = index + 1
            block_loose: list[int] = []

            if line.head == OPTION:
                self._parse_option(node, line, index)
            elif len(line.ids) == 1:
                tag = line.head
                if tag == SCENE:
                    node.kind = NodeKind.SCENE
                    node.content = line.content
                elif tag == END:
                    node.kind = NodeKind.END
                    self._reconnect(pending, current)
                    self._cursor += 1
                    return head
                elif tag == CHOICES:
                    block_loose = self._parse_choices(node, index)
                elif tag == DEAD:
                    node.kind = NodeKind.DEAD
                    self._cursor += 1
                    self._hand_up(pending + [current])
                    return head
                elif tag == CLOSE:
                    self._cursor += 1
                    continue
                else:
                    node.kind = NodeKind.PERSON_SAY
                    node.name = tag
                    node.content = line.content
            else:
                if line.head in self.option_names:
                    # Threshold line reused as inline label text
                    self._cursor += 1
                    continue
                node.kind = NodeKind.PERSON_THINK
                node.name = line.head
                node.content = line.content

            self._reconnect(pending, current)
            pending = block_loose

            successor = self.graph.add()
            node.children.append(successor)
            current = successor
            self._cursor += 1

        self._hand_up(pending)
        return head

    def _parse_option(self, node: Node, line: ScriptLine, index: int) -> None:
        """Fill an option node; leaves the cursor on its closing '/'."""
        name = line.content if len(line.ids) == 1 else (line.ids[1] or line.content)
        if not name:
            raise ScriptSyntaxError("<option> needs a name", index + 1, self.source[index])

        # Labels are stored joined, so the runtime splits on this again
        separator = self.config.option_separator.strip() or self.config.option_separator
        labels: list[str] = []
        cursor = index + 1
        while True:
            if cursor >= len(self.lines):
                raise ScriptSyntaxError(
                    f"option '{name}' is never closed with </>", index + 1, self.source[index]
                )
            label_line = self.lines[cursor]
            if label_line.is_close:
                break
            label = label_line.content or label_line.head
            if separator in label:
                logger.warning(
                    f"Line {cursor + 1}: label '{label}' of option '{name}' contains "
                    f"'{separator}' and will be shown as separate choices"
                )
            labels.append(label)
            cursor += 1

        if not labels:
            raise ScriptSyntaxError(f"option '{name}' has no choices", index + 1, self.source[index])

        node.kind = NodeKind.OPTION
        node.name = name
        node.content = self.config.option_separator.join(labels)
        self.option_names.add(name)
        self._cursor = cursor

    def _parse_choices(self, node: Node, index: int) -> list[int]:
        """
        Fill a choice node with one child per branch.

        Leaves the cursor on the block's closing '/' and returns the loose ends
        the block left open.
        """
        block = scan_choice_block(self.lines, index + 1)
        node.kind = NodeKind.CHOICE
        node.content = format_branch_pairs(block.pairs)
        logger.debug(
            f"Choice block at line {index + 1}: {node.content} (ends at line {block.end})"
        )

        self._loose_stack.append([])
        for branch in block.branches:
            self._cursor = branch.line_index + 1
            node.children.append(self._parse_sequence())
        loose = self._loose_stack.pop()

        self._cursor = block.end - 1
        return loose

    def _reconnect(self, loose: list[int], target: int) -> None:
        """Point every loose end at the node where its block's branches meet."""
        for node_id in loose:
            self.graph[node_id].children.append(target)

    def _hand_up(self, loose: list[int]) -> None:
        """Pass loose ends to the enclosing choices block, if any."""
        if self._loose_stack:
            self._loose_stack[-1].extend(loose)


def compile_script(
    source: str | Iterable[str],
    config: Optional[DialogueConfig] = None,
) -> DialogueGraph:
    """
    Compile script text (or a sequence of lines) into a canonical graph.

    Raises:
        ScriptSyntaxError: if the script is empty or malformed
    """
    return ScriptParser(source, config).parse_full()


def compile_file(
    path: str | Path,
    config: Optional[DialogueConfig] = None,
) -> DialogueGraph:
    """Compile a script file."""
    config = config or DialogueConfig()
    lines = load_script_file(path, encoding=config.encoding)
    logger.debug(f"Loaded {len(lines)} lines from {path}")
    return compile_script(lines, config)
