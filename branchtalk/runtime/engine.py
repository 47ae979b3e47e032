"""
Dialogue engine - walks a compiled graph one step at a time.

Usage:
    graph = compile_file("intro.dlg")
    engine = DialogueEngine(graph)

    step = engine.advance()
    while step is not None:
        render(step)
        if step.is_option:
            engine.select(ask_player(step.choices))
        step = engine.advance()
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from branchtalk.core.config import DialogueConfig
from branchtalk.core.errors import SequencingError
from branchtalk.core.events import EventBus, DialogueEvent
from branchtalk.runtime.memory import OptionMemory
from branchtalk.runtime.step import Step, StepKind
from branchtalk.script.nodes import DialogueGraph, NodeKind, parse_branch_pairs

logger = logging.getLogger(__name__)

# Chooser for steps(): receives an option step, returns the selected index
Chooser = Callable[[Step], int]

_STEP_KINDS = {
    NodeKind.SCENE: StepKind.SCENE,
    NodeKind.OPTION: StepKind.OPTION,
    NodeKind.END: StepKind.END,
    NodeKind.PERSON_SAY: StepKind.PERSON_SAY,
    NodeKind.PERSON_THINK: StepKind.PERSON_THINK,
}


class DialogueEngine:
    """
    One playthrough of a compiled dialogue graph.

    Holds the current position and the OptionMemory; never modifies the graph,
    so any number of engines can share one compiled graph.
    """

    def __init__(
        self,
        graph: DialogueGraph,
        config: Optional[DialogueConfig] = None,
        events: Optional[EventBus] = None,
    ):
        self.graph = graph
        self.config = config or DialogueConfig()
        self.events = events

        self._current = graph.root
        # Declared up front so branches on later options resolve as unset
        self.memory = OptionMemory(graph.option_names())

        self._in_option = False
        self._pending_option = ""
        self._pending_choices: list[str] = []
        self._finished = False

    @property
    def waiting_for_selection(self) -> bool:
        """True while an option prompt is open."""
        return self._in_option

    @property
    def finished(self) -> bool:
        """True once advance() has returned None."""
        return self._finished

    @property
    def current_kind(self) -> NodeKind:
        return self.graph[self._current].kind

    def advance(self) -> Optional[Step]:
        """
        Move to the next node and return it as a Step.

        Returns:
            The next step, or None when the dialogue is over

        Raises:
            SequencingError: if an option prompt is waiting for select()
        """
        if self._in_option:
            raise SequencingError(
                f"select() must be called for option '{self._pending_option}' before advance()"
            )

        node_id = self._successor(self._current)
        if node_id is None:
            return self._finish()

        while self.graph[node_id].kind is NodeKind.CHOICE:
            self._current = node_id
            node_id = self._resolve_choice(node_id)
            if node_id is None:
                return self._finish()

        self._current = node_id
        step = self._to_step(node_id)
        logger.debug(f"Step: {step.describe()}")

        if self.events:
            self.events.publish(DialogueEvent.STEP, step=step)
            if step.is_option:
                self.events.publish(DialogueEvent.OPTION_OPENED, step=step, option=step.name)
        return step

    def select(self, index: int) -> None:
        """
        Answer the open option prompt with the 0-based choice index.

        Does nothing when no prompt is open.

        Raises:
            IndexError: with strict_selection, for an index outside the labels
        """
        if not self._in_option:
            return

        if self.config.strict_selection and not 0 <= index < len(self._pending_choices):
            raise IndexError(
                f"Choice {index} out of range for option '{self._pending_option}' "
                f"({len(self._pending_choices)} choices)"
            )

        self.memory.record(self._pending_option, index)
        self._in_option = False
        logger.debug(f"Selected {index} for option '{self._pending_option}'")

        if self.events:
            self.events.publish(
                DialogueEvent.OPTION_SELECTED, option=self._pending_option, index=index
            )

    def steps(self, chooser: Optional[Chooser] = None) -> Iterator[Step]:
        """
        Iterate the rest of the dialogue.

        Args:
            chooser: Called with every option step; its result is passed to
                select(). Defaults to always picking the first choice.
        """
        chooser = chooser or (lambda step: 0)
        step = self.advance()
        while step is not None:
            yield step
            if step.is_option:
                self.select(chooser(step))
            step = self.advance()

    def _successor(self, node_id: int) -> Optional[int]:
        children = self.graph[node_id].children
        return children[0] if children else None

    def _resolve_choice(self, node_id: int) -> Optional[int]:
        """Pick the branch of a choice node under the current memory."""
        node = self.graph[node_id]
        if not node.children:
            return None

        # Last child is the node after the block, or the last branch when
        # nothing follows the block
        chosen = node.children[-1]
        matched = None
        for position, (label, threshold) in enumerate(parse_branch_pairs(node.content)):
            if self.memory.matches(label, threshold):
                if position < len(node.children):
                    chosen = node.children[position]
                matched = (label, threshold)
                break

        logger.debug(
            f"Choice at line {node.line_number} -> node {chosen} "
            f"({f'matched {matched[0]},{matched[1]}' if matched else 'fallback'})"
        )
        if self.events:
            self.events.publish(
                DialogueEvent.BRANCH_RESOLVED, node=node_id, branch=chosen, matched=matched
            )
        return chosen

    def _to_step(self, node_id: int) -> Step:
        node = self.graph[node_id]
        kind = _STEP_KINDS.get(node.kind)
        if kind is None:
            raise ValueError(f"Node {node_id} of kind {node.kind.value} cannot be shown")

        if kind is StepKind.OPTION:
            separator = self.config.option_separator.strip() or self.config.option_separator
            choices = [part.strip() for part in node.content.split(separator) if part.strip()]
            self._in_option = True
            self._pending_option = node.name
            self._pending_choices = choices
            return Step(kind=kind, name=node.name, content=node.content, choices=choices)

        return Step(kind=kind, name=node.name, content=node.content)

    def _finish(self) -> None:
        if not self._finished:
            self._finished = True
            logger.debug("Dialogue finished")
            if self.events:
                self.events.publish(DialogueEvent.FINISHED)
        return None
