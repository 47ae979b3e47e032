"""
Line decoder and script loader.

A script line is one or two tag identifiers followed by free content:

```
<scene>Forest clearing
<Mira>Did you hear that?
<Mira><thinking>It came from the river.
```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from branchtalk.core.errors import ScriptSyntaxError

TAG_PATTERN = re.compile(r'<([^<>]*)>')
LABEL_THRESHOLD = re.compile(r'^[+-]?\d+$')

# Reserved identifiers
SCENE = "scene"
OPTION = "option"
CHOICES = "choices"
END = "END"
DEAD = "//"
CLOSE = "/"


@dataclass(frozen=True)
class ScriptLine:
    """A decoded source line."""
    ids: tuple[str, ...]
    content: str = ""

    @property
    def head(self) -> str:
        return self.ids[0]

    @property
    def is_close(self) -> bool:
        """True for a bare terminator line (sole identifier '/')."""
        return self.ids == (CLOSE,)

    @property
    def threshold(self) -> Optional[int]:
        """Second identifier as an integer, or None if it is not one."""
        if len(self.ids) != 2:
            return None
        try:
            return int(self.ids[1])
        except ValueError:
            return None


def decode_line(line: str, line_number: Optional[int] = None) -> ScriptLine:
    """
    Split a line into its tag identifiers and trailing content.

    `<pick,1>` is read as the two identifiers `pick` and `1` (only when the
    text after the comma is an integer), and a bare `/`
    line is the same as `</>`.

    Raises:
        ScriptSyntaxError: if the line has no identifier or more than two
    """
    if line.strip() == CLOSE:
        return ScriptLine(ids=(CLOSE,))

    ids = [tag.strip() for tag in TAG_PATTERN.findall(line)]
    if len(ids) == 1 and "," in ids[0]:
        name, threshold = ids[0].split(",", 1)
        if LABEL_THRESHOLD.match(threshold.strip()):
            ids = [name.strip(), threshold.strip()]

    if not ids:
        raise ScriptSyntaxError("line has no <tag>", line_number, line)
    if len(ids) > 2:
        raise ScriptSyntaxError(
            f"line has {len(ids)} tags, expected one or two", line_number, line
        )

    content = line[line.rfind('>') + 1:].strip()
    return ScriptLine(ids=tuple(ids), content=content)


def load_script(source: str | Iterable[str]) -> list[str]:
    """Trim every line and drop blank ones."""
    if isinstance(source, str):
        source = source.splitlines()
    return [line.strip() for line in source if line.strip()]


def load_script_file(path: str | Path, encoding: str = "utf-8") -> list[str]:
    """Read a script file into a list of trimmed, non-empty lines."""
    path = Path(path)
    with open(path, 'r', encoding=encoding) as f:
        return load_script(f.read())
