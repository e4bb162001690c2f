#!/usr/bin/env python3
"""
Net - Builder Layer

NetBuilder provides the API for declaratively constructing Petri net
specifications. Used directly, or within @pn.net decorated functions:

    @pn.net
    def Counter(builder):
        count = builder.cell("count", initial=0, capacity=3)
        inc = builder.func("inc")
        dec = builder.func("dec")
        builder.arrow(inc, count).arrow(dec)
"""

from typing import Callable, List, Optional

from ..exceptions import BuilderError
from .specs import ArcSpec, NetSpec, NodeRef, PlaceRef, TransitionRef


class ArcChain:
    """Fluent interface for chaining arc definitions"""

    def __init__(self, builder: "NetBuilder", last_ref: NodeRef):
        self.builder = builder
        self.last_ref = last_ref

    def arc(self, target: NodeRef, weight: int = 1) -> "ArcChain":
        """Chain another arc from the last element to target"""
        return self.builder.add_arc(self.last_ref, target, weight)

    arrow = arc


class NetBuilder:
    """Builder for constructing Petri net specifications

    The builder owns its NetSpec until build() hands it over; after that
    the builder is sealed and every call raises BuilderError.
    """

    def __init__(self, model_type: Optional[str] = None, spec: Optional[NetSpec] = None):
        if spec is None:
            spec = NetSpec() if model_type is None else NetSpec(model_type)
        elif model_type is not None:
            spec.model_type = model_type
        self._spec: Optional[NetSpec] = spec

    @property
    def spec(self) -> NetSpec:
        if self._spec is None:
            raise BuilderError("NetBuilder was already consumed by build()")
        return self._spec

    def build(self) -> NetSpec:
        """Hand over the finished net and seal the builder"""
        spec = self.spec
        self._spec = None
        return spec

    def model_type(self, model_type: str) -> "NetBuilder":
        """Set the declared model type (validated at compile time)"""
        self.spec.model_type = model_type
        return self

    def _kind(self, node: NodeRef) -> str:
        if isinstance(node, PlaceRef):
            return "place"
        if isinstance(node, TransitionRef):
            return "transition"
        if node in self.spec.places:
            return "place"
        if node in self.spec.transitions:
            return "transition"
        raise BuilderError(f"Unknown node {node!r}: declare it before connecting it")

    def _check_alternates(self, source: NodeRef, target: NodeRef):
        source_kind = self._kind(source)
        target_kind = self._kind(target)
        if source_kind == target_kind:
            raise BuilderError(
                f"Cannot connect {source_kind} {source} to {target_kind} {target} directly. "
                f"Arcs must alternate between places and transitions."
            )

    @staticmethod
    def _check_weight(weight: int):
        if weight <= 0:
            raise BuilderError(f"Arc weight must be positive, got {weight}")

    def add_place(
        self,
        label: str,
        initial: Optional[int] = None,
        capacity: Optional[int] = None,
        x: int = 0,
        y: int = 0,
    ) -> PlaceRef:
        """Declare a place; its offset is its insertion order"""
        return self.spec.add_place(label, None, initial, capacity, x, y)

    def add_transition(
        self,
        label: str,
        role: Optional[str] = None,
        x: int = 0,
        y: int = 0,
        allow_reentry: bool = False,
    ) -> TransitionRef:
        """Declare a transition; its offset is its insertion order"""
        return self.spec.add_transition(label, role, x, y, allow_reentry)

    def add_arc(self, source: NodeRef, target: NodeRef, weight: int = 1) -> ArcChain:
        """Create a flow arc and return chainable ArcChain"""
        self._check_weight(weight)
        self._check_alternates(source, target)
        self.spec.add_arc(source, target, weight)
        return ArcChain(self, target)

    # pflow-style aliases
    cell = add_place
    func = add_transition
    arrow = add_arc

    def guard(
        self, source: NodeRef, target: NodeRef, weight: int = 1, read: Optional[bool] = None
    ) -> ArcSpec:
        """Create a guard arc.

        Drawn place -> transition it is an inhibitor: the transition is
        blocked while the place holds at least weight tokens. Drawn
        transition -> place it is a read arc: the transition requires at
        least weight tokens without consuming them. Pass read explicitly to
        override the direction-based default.
        """
        self._check_weight(weight)
        self._check_alternates(source, target)
        return self.spec.add_arc(source, target, weight, inhibit=True, read=read)

    def forward(self, input_place: PlaceRef, output_place: PlaceRef, name: Optional[str] = None) -> TransitionRef:
        """Create a transition moving one token from input to output"""
        trans = self.add_transition(name or f"forward_{input_place}_to_{output_place}")
        self.add_arc(input_place, trans)
        self.add_arc(trans, output_place)
        return trans

    def fork(self, input_place: PlaceRef, output_places: List[PlaceRef], name: Optional[str] = None) -> TransitionRef:
        """Create a transition that puts a token into every output"""
        trans = self.add_transition(name or f"fork_{input_place}")
        self.add_arc(input_place, trans)
        for output_place in output_places:
            self.add_arc(trans, output_place)
        return trans

    def join(self, input_places: List[PlaceRef], output_place: PlaceRef, name: Optional[str] = None) -> TransitionRef:
        """Create a transition that waits for a token in every input"""
        trans = self.add_transition(name or f"join_to_{output_place}")
        for input_place in input_places:
            self.add_arc(input_place, trans)
        self.add_arc(trans, output_place)
        return trans


class PetriNetDSL:
    """Module-level API for Petri net definition"""

    @staticmethod
    def net(func: Callable) -> Callable:
        """
        Decorator for defining a Petri net.
        The decorated function receives a NetBuilder as its parameter.
        """
        builder = NetBuilder()
        func(builder)
        spec = builder.build()

        func._spec = spec
        func.to_mermaid = lambda: spec.to_mermaid()

        return func


pn = PetriNetDSL()
