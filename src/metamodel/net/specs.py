#!/usr/bin/env python3
"""
Net - Specification Layer

Core data structures representing the declarative bipartite graph of a
Petri net: places, transitions and the arcs between them. These are built
by the builder API, the diagram parsers or the JSON loader, and consumed by
the compiler in metamodel.vasm.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union
from enum import Enum

from ..common.mermaid import format_arc, format_place_node, format_transition_node
from ..config import get_config
from ..exceptions import BuilderError, InvalidModelType


class ModelType(Enum):
    """Execution semantics of a compiled net"""
    PETRI_NET = "petriNet"  # Multi-token, bounded by capacity
    ELEMENTARY = "elementary"  # Exactly one active place, no clamping
    WORKFLOW = "workflow"  # Exactly one active place, clamped, reentry allowed

    @classmethod
    def parse(cls, name: str) -> "ModelType":
        """Resolve a declared model type string"""
        try:
            return cls(name)
        except ValueError:
            raise InvalidModelType(
                f"Invalid model type {name!r}: must be one of "
                f"{', '.join(m.value for m in cls)}"
            ) from None


@dataclass
class PlaceSpec:
    """Specification for a place in the Petri net"""
    name: str
    offset: int  # Dense index into every vector
    initial: Optional[int] = None  # Token count, None means 0
    capacity: Optional[int] = None  # None or 0 means unbounded
    x: int = 0
    y: int = 0


@dataclass
class TransitionSpec:
    """Specification for a transition in the Petri net"""
    name: str
    offset: int  # Only used to order the action list
    role: Optional[str] = None
    allow_reentry: bool = False  # Workflow nets only
    x: int = 0
    y: int = 0


@dataclass
class ArcSpec:
    """Specification for an arc connecting a place and a transition

    consume/produce/inhibit/read are tri-state: None means "not declared",
    and is filled in by NetSpec.populate_arc_attributes().
    """
    source: str
    target: str
    weight: int = 1
    consume: Optional[bool] = None
    produce: Optional[bool] = None
    inhibit: Optional[bool] = None
    read: Optional[bool] = None

    @property
    def is_guard(self) -> bool:
        return bool(self.inhibit)

    def inferred(self, net: "NetSpec") -> "ArcSpec":
        """Return a copy with undeclared attributes inferred from the net"""
        source_is_place = self.source in net.places
        source_is_transition = self.source in net.transitions
        return replace(
            self,
            consume=source_is_place if self.consume is None else self.consume,
            produce=source_is_transition if self.produce is None else self.produce,
            read=(source_is_transition and bool(self.inhibit)) if self.read is None else self.read,
        )


class PlaceRef:
    """Reference to a place for use in arc definitions"""
    def __init__(self, name: str, spec: "NetSpec"):
        self.name = name
        self.spec = spec

    @property
    def offset(self) -> int:
        return self.spec.places[self.name].offset

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"PlaceRef({self.name})"


class TransitionRef:
    """Reference to a transition for use in arc definitions"""
    def __init__(self, name: str, spec: "NetSpec"):
        self.name = name
        self.spec = spec

    @property
    def offset(self) -> int:
        return self.spec.transitions[self.name].offset

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"TransitionRef({self.name})"


NodeRef = Union[PlaceRef, TransitionRef, str]


def _label_of(node: NodeRef) -> str:
    return node.name if isinstance(node, (PlaceRef, TransitionRef)) else node


@dataclass
class NetSpec:
    """Complete specification of a Petri net"""
    model_type: str = field(default_factory=lambda: get_config().default_model_type)
    version: str = "v0"
    places: Dict[str, PlaceSpec] = field(default_factory=dict)  # Labels as keys
    transitions: Dict[str, TransitionSpec] = field(default_factory=dict)  # Labels as keys
    arcs: List[ArcSpec] = field(default_factory=list)

    def _check_new_label(self, label: str):
        if label in self.places or label in self.transitions:
            raise BuilderError(f"Label {label!r} is already declared in this net")

    def add_place(
        self,
        label: str,
        offset: Optional[int] = None,
        initial: Optional[int] = None,
        capacity: Optional[int] = None,
        x: int = 0,
        y: int = 0,
    ) -> PlaceRef:
        """Add a place; the offset defaults to the current place count"""
        self._check_new_label(label)
        if offset is None:
            offset = len(self.places)
        self.places[label] = PlaceSpec(label, offset, initial, capacity, x, y)
        return PlaceRef(label, self)

    def add_transition(
        self,
        label: str,
        role: Optional[str] = None,
        x: int = 0,
        y: int = 0,
        allow_reentry: bool = False,
    ) -> TransitionRef:
        """Add a transition; its offset is the current transition count"""
        self._check_new_label(label)
        offset = len(self.transitions)
        if role is None:
            role = get_config().default_role
        self.transitions[label] = TransitionSpec(label, offset, role, allow_reentry, x, y)
        return TransitionRef(label, self)

    def add_arc(
        self,
        source: NodeRef,
        target: NodeRef,
        weight: int = 1,
        consume: Optional[bool] = None,
        produce: Optional[bool] = None,
        inhibit: Optional[bool] = None,
        read: Optional[bool] = None,
    ) -> ArcSpec:
        """Append an arc; endpoints are checked when the net is compiled"""
        arc = ArcSpec(_label_of(source), _label_of(target), weight, consume, produce, inhibit, read)
        self.arcs.append(arc)
        return arc

    def populate_arc_attributes(self):
        """Infer consume, produce and read for every arc that leaves them unset.

        - consume defaults to "source is a place"
        - produce defaults to "source is a transition"
        - read defaults to "source is a transition and the arc inhibits"
        """
        self.arcs = [arc.inferred(self) for arc in self.arcs]

    def places_by_offset(self) -> List[PlaceSpec]:
        return sorted(self.places.values(), key=lambda p: p.offset)

    def transitions_by_offset(self) -> List[TransitionSpec]:
        return sorted(self.transitions.values(), key=lambda t: t.offset)

    def _node_id(self, label: str) -> str:
        if label in self.places:
            return f"p{self.places[label].offset}"
        if label in self.transitions:
            return f"t{self.transitions[label].offset}"
        return label

    def to_mermaid(self) -> str:
        """Generate Mermaid diagram of the net"""
        lines = ["graph TD"]

        for place in self.places_by_offset():
            lines.append(format_place_node(
                self._node_id(place.name), place.name, place.initial or 0, place.capacity or 0
            ))

        for trans in self.transitions_by_offset():
            lines.append(format_transition_node(self._node_id(trans.name), trans.name, trans.role))

        for arc in self.arcs:
            lines.append(format_arc(
                self._node_id(arc.source), self._node_id(arc.target), arc.weight, arc.is_guard
            ))

        return "\n".join(lines)
