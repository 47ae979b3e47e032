from branchtalk.script.fixup import fix_graph
from branchtalk.script.nodes import DialogueGraph, NodeKind
from branchtalk.script.parser import ScriptParser, compile_script


def test_no_placeholders_reachable(nested_script, forward_script, pick_script):
    for script in (nested_script, forward_script, pick_script):
        graph = compile_script(script)
        kinds = {graph[node_id].kind for node_id in graph.reachable()}
        assert not any(kind.is_placeholder for kind in kinds)


def test_raw_graph_has_placeholders(nested_script):
    graph = ScriptParser(nested_script).parse()
    kinds = {graph[node_id].kind for node_id in graph.reachable()}
    assert NodeKind.DEAD in kinds


def test_splice_replaces_edge_with_placeholder_edges():
    graph = DialogueGraph()
    root = graph.add(NodeKind.START)
    dead = graph.add(NodeKind.DEAD)
    a = graph.add(NodeKind.PERSON_SAY, name="A", content="one")
    b = graph.add(NodeKind.PERSON_SAY, name="B", content="two")
    graph[root].children = [dead]
    graph[dead].children = [a, b]

    fix_graph(graph)

    assert graph[root].children == [a, b]


def test_chained_placeholders_are_rechecked():
    graph = DialogueGraph()
    root = graph.add(NodeKind.START)
    empty = graph.add(NodeKind.EMPTY)
    dead = graph.add(NodeKind.DEAD)
    end = graph.add(NodeKind.END)
    graph[root].children = [empty]
    graph[empty].children = [dead]
    graph[dead].children = [end]

    fix_graph(graph)

    assert graph[root].children == [end]


def test_childless_placeholder_is_dropped():
    graph = DialogueGraph()
    root = graph.add(NodeKind.START)
    say = graph.add(NodeKind.PERSON_SAY, name="A")
    tail = graph.add(NodeKind.EMPTY)
    graph[root].children = [say]
    graph[say].children = [tail]

    fix_graph(graph)

    assert graph[say].children == []


def test_childless_choice_branch_becomes_end():
    graph = DialogueGraph()
    root = graph.add(NodeKind.START)
    choice = graph.add(NodeKind.CHOICE, content="p,1; p,2")
    dead = graph.add(NodeKind.DEAD)
    say = graph.add(NodeKind.PERSON_SAY, name="A")
    tail = graph.add(NodeKind.EMPTY)
    graph[root].children = [choice]
    graph[choice].children = [dead, say, tail]

    fix_graph(graph)

    first, second = graph.children(choice)
    assert first.kind is NodeKind.END
    assert second is graph[say]


def test_shared_successor_visited_once():
    graph = DialogueGraph()
    root = graph.add(NodeKind.START)
    choice = graph.add(NodeKind.CHOICE, content="p,1")
    left = graph.add(NodeKind.PERSON_SAY)
    after = graph.add(NodeKind.PERSON_SAY)
    dead = graph.add(NodeKind.DEAD)
    graph[root].children = [choice]
    graph[choice].children = [left, after]
    graph[left].children = [dead]
    graph[dead].children = [after]

    fix_graph(graph)

    assert graph[left].children == [after]
    assert list(graph.reachable()).count(after) == 1
