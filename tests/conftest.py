import os
import sys
import pytest

# Ensure branchtalk can be imported without installing
sys.path.append(os.getcwd())


SCENE_SCRIPT = """
<scene>Forest
<A>Hello
<END>
"""

PICK_SCRIPT = """
<option>pick
<go_left>Go left
<go_right>Go right
/
<choices>
<pick,1>
<A>Left
<END>
<pick,2>
<A>Right
<END>
/
"""

# Nested block whose inner labels reuse the outer option name
NESTED_SCRIPT = """
<option>mood
<a>Happy
<b>Sad
/
<choices>
<mood><1>
<A>Glad to hear
<choices>
<mood><1>
<A>Really glad
<//>
<mood><2>
<A>Hm
<//>
/
<//>
<mood><2>
<A>Sorry
<//>
/
<A>Anyway
<END>
"""

FORWARD_SCRIPT = """
<scene>Start
<choices>
<later,1>
<A>You picked x before?
<//>
<later,2>
<A>You picked y before?
<//>
/
<B>Nothing picked yet
<option>later
<x>X
<y>Y
/
<END>
"""


@pytest.fixture
def scene_script():
    return SCENE_SCRIPT


@pytest.fixture
def pick_script():
    return PICK_SCRIPT


@pytest.fixture
def nested_script():
    return NESTED_SCRIPT


@pytest.fixture
def forward_script():
    return FORWARD_SCRIPT


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from branchtalk.core.events import EventBus
    return EventBus()


@pytest.fixture
def script_file(tmp_path):
    """Write PICK_SCRIPT to a file and return its path."""
    path = tmp_path / "pick.dlg"
    path.write_text(PICK_SCRIPT, encoding="utf-8")
    return path
