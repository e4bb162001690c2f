#!/usr/bin/env python3
"""
VASM - Compiler

Translates a declarative NetSpec into a dense StateMachine. Every
structural problem (unknown endpoints, ambiguous arcs, bad markings,
broken offsets) is reported here as a CompileError, so transform()
never has to validate anything beyond the action name.

The input net is never modified: arc attributes are inferred on copies.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from ..config import get_config
from ..exceptions import (
    DanglingArcReference,
    InvalidArc,
    InvalidCapacity,
    InvalidInitialMarking,
    InvalidOffset,
    OffsetOverflow,
)
from ..net.specs import ArcSpec, ModelType, NetSpec
from .machine import StateMachine, Transition
from .vector import Guard, one_hot, zero_vector

logger = logging.getLogger(__name__)

# Offsets are signed 32-bit indices
MAX_OFFSET = 2**31 - 1


def _get_spec(net: Any) -> NetSpec:
    """Extract the NetSpec from a spec or a @pn.net decorated function"""
    if isinstance(net, NetSpec):
        return net
    spec = getattr(net, "_spec", None)
    if isinstance(spec, NetSpec):
        return spec
    raise TypeError(
        f"Expected a NetSpec or a @pn.net decorated function, got {type(net).__name__}"
    )


def _check_offsets(kind: str, offsets: Mapping[str, int]):
    count = len(offsets)
    if count > MAX_OFFSET + 1:
        raise OffsetOverflow(f"{count} {kind}s exceed the offset range")

    owners: Dict[int, str] = {}
    for label, offset in offsets.items():
        if not 0 <= offset < count:
            raise OffsetOverflow(
                f"{kind} {label!r} has offset {offset}, expected 0..{count - 1}"
            )
        if offset in owners:
            raise InvalidOffset(
                f"{kind}s {owners[offset]!r} and {label!r} share offset {offset}"
            )
        owners[offset] = label


def _check_endpoints(arc: ArcSpec, net: NetSpec):
    for label in (arc.source, arc.target):
        if label not in net.places and label not in net.transitions:
            raise DanglingArcReference(
                f"Arc {arc.source!r} -> {arc.target!r} references unknown node {label!r}"
            )
    if (arc.source in net.places) == (arc.target in net.places):
        raise InvalidArc(
            f"Arc {arc.source!r} -> {arc.target!r} must connect a place and a transition"
        )
    if arc.weight <= 0:
        raise InvalidArc(
            f"Arc {arc.source!r} -> {arc.target!r} has non-positive weight {arc.weight}"
        )


def _apply_flow_arc(arc: ArcSpec, net: NetSpec, deltas: Dict[str, List[int]]):
    if bool(arc.consume) == bool(arc.produce):
        raise InvalidArc(
            f"Arc {arc.source!r} -> {arc.target!r} must be either produce or consume"
        )
    if arc.consume:
        if arc.source not in net.places:
            raise InvalidArc(f"Consuming arc {arc.source!r} -> {arc.target!r} must start at a place")
        deltas[arc.target][net.places[arc.source].offset] -= arc.weight
    else:
        if arc.source not in net.transitions:
            raise InvalidArc(f"Producing arc {arc.source!r} -> {arc.target!r} must start at a transition")
        deltas[arc.source][net.places[arc.target].offset] += arc.weight


def _apply_guard_arc(arc: ArcSpec, net: NetSpec, guards: Dict[str, Dict[str, List[Guard]]]):
    # Read guards and producer-shaped arcs are owned by their source
    if arc.read or arc.produce:
        owner, monitored = arc.source, arc.target
    else:
        owner, monitored = arc.target, arc.source
    if owner not in net.transitions:
        # The arc is drawn against its declared flags; the transition end owns it
        owner, monitored = monitored, owner
    offset = net.places[monitored].offset
    # A place may carry several guards, e.g. a read lower bound and an inhibitor upper bound
    guards[owner].setdefault(monitored, []).append(
        Guard(one_hot(len(net.places), offset, -arc.weight), bool(arc.read))
    )


def compile(net: Any) -> StateMachine:
    """
    Compile a net into a StateMachine.

    Args:
        net: A NetSpec, or a function decorated with @pn.net

    Returns:
        The compiled, immutable StateMachine

    Raises:
        InvalidModelType: the declared model type is unknown
        OffsetOverflow, InvalidOffset: offsets are out of range or shared
        DanglingArcReference: an arc names an undeclared node
        InvalidArc: an arc is malformed or ambiguous
        InvalidInitialMarking, InvalidCapacity: a place has negative bounds
    """
    spec = _get_spec(net)
    config = get_config()
    model_type = ModelType.parse(spec.model_type)

    _check_offsets("place", {label: p.offset for label, p in spec.places.items()})
    _check_offsets("transition", {label: t.offset for label, t in spec.transitions.items()})

    size = len(spec.places)
    roles = {label: t.role or config.default_role for label, t in spec.transitions.items()}
    deltas: Dict[str, List[int]] = {label: zero_vector(size) for label in spec.transitions}
    guards: Dict[str, Dict[str, List[Guard]]] = {label: {} for label in spec.transitions}

    for declared in spec.arcs:
        arc = declared.inferred(spec)
        _check_endpoints(arc, spec)
        if arc.is_guard:
            _apply_guard_arc(arc, spec, guards)
        else:
            _apply_flow_arc(arc, spec, deltas)

    places = spec.places_by_offset()
    initial = []
    capacity = []
    for place in places:
        tokens = place.initial or 0
        bound = place.capacity or 0
        if tokens < 0:
            raise InvalidInitialMarking(f"Place {place.name!r} has negative initial marking {tokens}")
        if bound < 0:
            raise InvalidCapacity(f"Place {place.name!r} has negative capacity {bound}")
        if model_type is ModelType.PETRI_NET:
            initial.append(tokens)
            capacity.append(bound)
        else:
            # Elementary and workflow places are boolean
            initial.append(1 if tokens > 0 else 0)
            capacity.append(1)

    transitions = {
        t.name: Transition(
            label=t.name,
            offset=t.offset,
            role=roles[t.name],
            delta=tuple(deltas[t.name]),
            guards=MappingProxyType({
                place: tuple(watching) for place, watching in guards[t.name].items()
            }),
            allow_reentry=t.allow_reentry,
        )
        for t in spec.transitions_by_offset()
    }

    logger.debug(
        "[compile] %s places=%d transitions=%d arcs=%d",
        model_type.value, size, len(transitions), len(spec.arcs),
    )

    return StateMachine(
        model_type=model_type,
        places=tuple(p.name for p in places),
        initial=tuple(initial),
        capacity=tuple(capacity),
        transitions=MappingProxyType(transitions),
        roles=frozenset(roles.values()),
        actions=tuple(transitions),
        strict_workflow_bounds=config.strict_workflow_bounds,
    )
