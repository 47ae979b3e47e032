"""
Choice block lookahead.

Finds where a `<choices>` block ends and which branch labels belong to it,
before any of its branches are parsed:

```
<choices>
<pick><1>          branch 1 label
<Mira>Left it is.
<//>               branch 1 closed
<pick><2>          branch 2 label
<choices>          nested block, its labels are not collected
...
/
<END>              branch 2 closed
/                  block closed
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from branchtalk.core.errors import ScriptSyntaxError
from branchtalk.script.lines import ScriptLine, CHOICES, OPTION, DEAD, END


@dataclass(frozen=True)
class BranchLabel:
    """A top-level branch of a choices block."""
    label: str
    threshold: int
    line_index: int


@dataclass
class ChoiceBlock:
    """
    Result of scanning a choices block.

    Attributes:
        end: Index of the first line after the block's closing '/'
        branches: Top-level branch labels in source order
    """
    end: int
    branches: list[BranchLabel] = field(default_factory=list)

    @property
    def pairs(self) -> list[tuple[str, int]]:
        return [(branch.label, branch.threshold) for branch in self.branches]


def scan_choice_block(lines: Sequence[ScriptLine], start: int) -> ChoiceBlock:
    """
    Scan a choices block whose first branch label is at `start`.

    Nested `<choices>` and `<option>` blocks raise the nesting depth and a bare
    `/` lowers it; the block ends when the depth returns to zero. A branch is
    opened by a label line at depth one and closed by `<//>` or `<END>` at depth
    one, and labels are only collected while no branch is open.

    Raises:
        ScriptSyntaxError: for an unterminated block or branch, a stray line
            between branches, or a block with no branches
    """
    depth = 1
    branch_open = False
    branches: list[BranchLabel] = []
    index = start

    while True:
        if index >= len(lines):
            raise ScriptSyntaxError("<choices> block is never closed with </>", start)

        line = lines[index]

        if depth == 1 and not branch_open:
            if line.is_close:
                break
            threshold = line.threshold
            if threshold is None:
                raise ScriptSyntaxError(
                    "expected a branch label such as <name><1>", index + 1, _text(line)
                )
            branches.append(BranchLabel(line.head, threshold, index))
            branch_open = True
            index += 1
            continue

        if line.head in (CHOICES, OPTION):
            depth += 1
        elif line.is_close:
            depth -= 1
            if depth == 0:
                label = branches[-1]
                raise ScriptSyntaxError(
                    f"branch <{label.label}><{label.threshold}> is not closed with "
                    f"<//> or <END> before the block ends",
                    index + 1,
                )
        elif depth == 1 and len(line.ids) == 1 and line.head in (DEAD, END):
            branch_open = False

        index += 1

    if not branches:
        raise ScriptSyntaxError("<choices> block has no branches", start)

    return ChoiceBlock(end=index + 1, branches=branches)


def _text(line: ScriptLine) -> str:
    tags = "".join(f"<{tag}>" for tag in line.ids)
    return f"{tags}{line.content}"
