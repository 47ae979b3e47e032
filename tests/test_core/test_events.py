import logging

import pytest

from branchtalk.core.events import DialogueEvent, Event
from branchtalk.runtime.engine import DialogueEngine
from branchtalk.script.parser import compile_script


def test_subscribe_publish(event_bus):
    received = []

    event_bus.subscribe(DialogueEvent.OPTION_SELECTED, received.append)
    event = event_bus.publish(DialogueEvent.OPTION_SELECTED, option="pick", index=1)

    assert received == [event]
    assert event.type is DialogueEvent.OPTION_SELECTED
    assert event["option"] == "pick"
    assert event.get("index") == 1
    assert event.get("missing", "none") == "none"


def test_only_matching_handlers_run(event_bus):
    received = []

    event_bus.subscribe(DialogueEvent.FINISHED, received.append)
    event_bus.publish(DialogueEvent.STEP, step=None)

    assert received == []


def test_handlers_run_in_subscription_order(event_bus):
    order = []

    event_bus.subscribe(DialogueEvent.FINISHED, lambda e: order.append("first"))
    event_bus.subscribe(DialogueEvent.FINISHED, lambda e: order.append("second"))
    event_bus.publish(DialogueEvent.FINISHED)

    assert order == ["first", "second"]


def test_unsubscribe(event_bus):
    received = []

    event_bus.subscribe(DialogueEvent.STEP, received.append)
    event_bus.unsubscribe(DialogueEvent.STEP, received.append)
    event_bus.unsubscribe(DialogueEvent.FINISHED, received.append)
    event_bus.publish(DialogueEvent.STEP, step=None)

    assert received == []


def test_handler_may_unsubscribe_itself(event_bus):
    calls = []

    def once(event):
        calls.append(event)
        event_bus.unsubscribe(DialogueEvent.STEP, once)

    event_bus.subscribe(DialogueEvent.STEP, once)
    event_bus.subscribe(DialogueEvent.STEP, calls.append)
    event_bus.publish(DialogueEvent.STEP, step=None)
    event_bus.publish(DialogueEvent.STEP, step=None)

    assert len(calls) == 3


def test_engine_reports_steps_and_selection(pick_script, event_bus):
    contents = []
    selections = []
    event_bus.subscribe(DialogueEvent.STEP, lambda e: contents.append(e["step"].content))
    event_bus.subscribe(
        DialogueEvent.OPTION_SELECTED, lambda e: selections.append((e["option"], e["index"]))
    )

    engine = DialogueEngine(compile_script(pick_script), events=event_bus)
    list(engine.steps(lambda step: 1))

    assert contents == ["Go left; Go right", "Right", ""]
    assert selections == [("pick", 1)]


def test_branch_resolution_payload(pick_script, event_bus):
    resolved = []
    event_bus.subscribe(DialogueEvent.BRANCH_RESOLVED, resolved.append)

    engine = DialogueEngine(compile_script(pick_script), events=event_bus)
    list(engine.steps(lambda step: 0))

    assert len(resolved) == 1
    assert resolved[0]["matched"] == ("pick", 1)


def test_failing_handler_does_not_stop_traversal(pick_script, event_bus, caplog):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    event_bus.subscribe(DialogueEvent.STEP, broken)
    event_bus.subscribe(DialogueEvent.STEP, received.append)
    engine = DialogueEngine(compile_script(pick_script), events=event_bus)

    with caplog.at_level(logging.ERROR, logger="branchtalk.core.events"):
        steps = list(engine.steps(lambda step: 0))

    assert len(steps) == 3
    assert len(received) == 3
    assert engine.finished
    assert "boom" in caplog.text
    assert "STEP" in caplog.text


def test_event_is_immutable():
    event = Event(type=DialogueEvent.FINISHED)
    assert event.data == {}
    with pytest.raises(AttributeError):
        event.type = DialogueEvent.STEP
