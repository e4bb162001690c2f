#!/usr/bin/env python3
"""
Net - Diagram Parsers

Build nets from line-oriented arrow diagrams.

Petri net diagrams declare their model type first; every other statement
links one place (capitalised label) and one transition (lower-case label):

    ModelType::PetriNet;
    Water --> boil_water;
    boil_water --> BoiledWater;

State diagrams describe a workflow net; each statement is a transition
between two states:

    [*] --> Still;
    Still --> Moving;
    Moving --> Crash;
"""

import logging
from typing import Iterator, Tuple

from ..config import get_config
from ..exceptions import DiagramSyntaxError
from .specs import ModelType, NetSpec

logger = logging.getLogger(__name__)

ARROW = "-->"
MODEL_TYPE_PREFIX = "ModelType::"

_DIAGRAM_MODEL_TYPES = {
    "petrinet": ModelType.PETRI_NET,
    "workflow": ModelType.WORKFLOW,
    "elementary": ModelType.ELEMENTARY,
}


class _Layout:
    """Lays nodes out left to right on a single row"""

    def __init__(self):
        config = get_config()
        self.x, self.y = config.diagram_origin
        self.grid = config.diagram_grid

    def next(self) -> Tuple[int, int]:
        self.x += self.grid
        return self.x, self.y


def _statements(contents: str) -> Iterator[str]:
    for line in contents.split(";"):
        line = line.strip()
        if line:
            yield line


def _arrow_parts(statement: str):
    parts = [part.strip() for part in statement.split(ARROW)]
    if len(parts) != 2:
        logger.debug("[diagram] skipping statement %r", statement)
        return None
    if not parts[0] or not parts[1]:
        raise DiagramSyntaxError(f"Arrow statement {statement!r} is missing an endpoint")
    return parts[0], parts[1]


def parse_model_type(statement: str) -> ModelType:
    """Parse a ``ModelType::<name>`` header (case-insensitive name)"""
    if not statement.startswith(MODEL_TYPE_PREFIX):
        raise DiagramSyntaxError(
            "First line must specify the model type in the format ModelType::[type]"
        )
    name = statement[len(MODEL_TYPE_PREFIX):].strip().lower()
    try:
        return _DIAGRAM_MODEL_TYPES[name]
    except KeyError:
        raise DiagramSyntaxError(
            f"Invalid ModelType {name!r}: must be one of petrinet, workflow, or elementary"
        ) from None


def from_diagram(contents: str) -> NetSpec:
    """Create a net from a Petri net arrow diagram"""
    statements = list(_statements(contents.replace("\n", "")))
    if not statements:
        raise DiagramSyntaxError("Diagram is empty")

    net = NetSpec(parse_model_type(statements[0]).value)
    layout = _Layout()

    for statement in statements[1:]:
        parts = _arrow_parts(statement)
        if parts is None:
            continue
        left, right = parts
        left_is_place = left[0].isupper()
        right_is_place = right[0].isupper()

        if left_is_place == right_is_place:
            kind = "places" if left_is_place else "transitions"
            raise DiagramSyntaxError(
                f"Statement {statement!r} connects two {kind}: "
                f"exactly one side must be an upper-case place"
            )

        place, action = (left, right) if left_is_place else (right, left)

        if place not in net.places:
            net.add_place(place, x=layout.next()[0], y=layout.y)
        if action not in net.transitions:
            net.add_transition(action, x=layout.next()[0], y=layout.y)

        net.add_arc(left, right, 1, consume=left_is_place, produce=right_is_place)

    logger.debug(
        "[diagram] parsed %s net places=%d transitions=%d",
        net.model_type, len(net.places), len(net.transitions),
    )
    return net


def from_state_diagram(contents: str) -> NetSpec:
    """Create a workflow net from a state diagram"""
    contents = contents.replace("\n", "").replace(" ", "")
    net = NetSpec(ModelType.WORKFLOW.value)
    layout = _Layout()

    for statement in _statements(contents):
        parts = _arrow_parts(statement)
        if parts is None:
            continue
        source, target = parts

        if source not in net.places:
            net.add_place(source, x=layout.next()[0], y=layout.y)
        if statement not in net.transitions:
            net.add_transition(statement, x=layout.next()[0], y=layout.y)
        if target not in net.places:
            net.add_place(target, x=layout.next()[0], y=layout.y)

        net.add_arc(source, statement, 1, consume=True, produce=False)
        net.add_arc(statement, target, 1, consume=False, produce=True)

    logger.debug(
        "[diagram] parsed state diagram places=%d transitions=%d",
        len(net.places), len(net.transitions),
    )
    return net
