#!/usr/bin/env python3
"""
VASM - Firing Engine

StateMachine is the compiled, executable form of a net. It owns no
marking: callers start from initial_vector() and thread the marking
through successive transform() calls, each of which returns a new
Transaction without touching the machine or the input marking.

A machine is immutable once built and can be shared freely between
threads. Callers that share a single "current marking" must lock around
their own read-transform-write cycle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from itertools import chain
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import UnknownAction, UnknownPlace
from ..net.specs import ModelType
from .vector import (
    Guard,
    Vector,
    VectorSum,
    active_count,
    clamp_workflow,
    guards_inhibit,
    vector_add,
    zero_vector,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """A compiled transition: its delta vector and guards

    guards maps each monitored place to every guard watching it.
    """
    label: str
    offset: int
    role: str
    delta: Tuple[int, ...]
    guards: Mapping[str, Tuple[Guard, ...]] = field(default_factory=lambda: MappingProxyType({}))
    allow_reentry: bool = False


@dataclass(frozen=True)
class Transaction:
    """
    Result of one firing attempt.

    A transition that cannot fire is not an error: ok is False and the
    flags say why.

    Attributes:
        output: The marking after the firing (fresh list, even when ok is False)
        ok: Whether the firing is allowed
        role: Role of the fired transition
        inhibited: A guard blocked the firing
        overflow: Some bounded place would exceed its capacity
        underflow: Some place would go negative
        action: The transition that was fired
        multiplier: How many times the delta was applied
    """
    output: Vector
    ok: bool
    role: str
    inhibited: bool = False
    overflow: bool = False
    underflow: bool = False
    action: str = ""
    multiplier: int = 1

    def is_ok(self) -> bool:
        return self.ok

    def is_err(self) -> bool:
        return not self.ok


@dataclass(frozen=True)
class StateMachine:
    """Vectorised, executable form of a Petri net"""
    model_type: ModelType
    places: Tuple[str, ...]  # Labels ordered by offset
    initial: Tuple[int, ...]
    capacity: Tuple[int, ...]  # 0 means unbounded
    transitions: Mapping[str, Transition]
    roles: FrozenSet[str]
    actions: Tuple[str, ...]  # Labels ordered by offset
    strict_workflow_bounds: bool = False

    @classmethod
    def from_model(cls, net) -> "StateMachine":
        """Compile a NetSpec (or @pn.net function) into a StateMachine"""
        from .compiler import compile

        return compile(net)

    def empty_vector(self) -> Vector:
        return zero_vector(len(self.places))

    def initial_vector(self) -> Vector:
        return list(self.initial)

    def transform(self, state: Sequence[int], action: str, multiplier: int = 1) -> Transaction:
        """Fire action against state, multiplier times at once.

        Raises:
            UnknownAction: action is not a transition of this machine
        """
        try:
            transition = self.transitions[action]
        except KeyError:
            raise UnknownAction(f"No transition for {action!r}") from None

        added = vector_add(self.capacity, state, transition.delta, multiplier)
        inhibited = guards_inhibit(
            self.capacity, state, chain.from_iterable(transition.guards.values()), multiplier
        )

        match self.model_type:
            case ModelType.PETRI_NET:
                result = self._fire_petri_net(transition, added, inhibited)
            case ModelType.ELEMENTARY:
                result = self._fire_elementary(transition, added, inhibited)
            case ModelType.WORKFLOW:
                result = self._fire_workflow(transition, added, inhibited)

        result = replace(result, action=action, multiplier=multiplier)
        logger.debug(
            "[fire] %s x%d ok=%s inhibited=%s overflow=%s underflow=%s",
            action, multiplier, result.ok, result.inhibited, result.overflow, result.underflow,
        )
        return result

    def _fire_petri_net(self, transition: Transition, added: VectorSum, inhibited: bool) -> Transaction:
        return Transaction(
            output=added.output,
            ok=added.ok and not inhibited,
            role=transition.role,
            inhibited=inhibited,
            overflow=added.overflow,
            underflow=added.underflow,
        )

    def _fire_elementary(self, transition: Transition, added: VectorSum, inhibited: bool) -> Transaction:
        single = active_count(added.output) == 1
        return Transaction(
            output=added.output,
            ok=added.ok and single and not inhibited,
            role=transition.role,
            inhibited=inhibited,
            overflow=added.overflow,
            underflow=added.underflow,
        )

    def _fire_workflow(self, transition: Transition, added: VectorSum, inhibited: bool) -> Transaction:
        output = clamp_workflow(added.output)
        single = active_count(output) == 1

        if transition.allow_reentry and added.overflow and single and not inhibited:
            return Transaction(
                output=output,
                ok=True,
                role=transition.role,
                inhibited=False,
                overflow=False,
                underflow=added.underflow,
            )

        # Overflow/underflow are reported but only gate ok in strict mode
        ok = single and not inhibited
        if self.strict_workflow_bounds:
            ok = ok and added.ok
        return Transaction(
            output=output,
            ok=ok,
            role=transition.role,
            inhibited=inhibited,
            overflow=added.overflow,
            underflow=added.underflow,
        )

    def is_enabled(self, state: Sequence[int], action: str, multiplier: int = 1) -> bool:
        return self.transform(state, action, multiplier).ok

    def enabled_actions(self, state: Sequence[int], role: Optional[str] = None) -> List[str]:
        """Actions that would fire successfully from state, in action order"""
        return [
            action for action in self.actions
            if (role is None or self.transitions[action].role == role)
            and self.transform(state, action).ok
        ]

    def marking(self, state: Sequence[int]) -> Dict[str, int]:
        """Label each slot of a dense marking with its place"""
        return dict(zip(self.places, state, strict=True))

    def vector(self, marking: Mapping[str, int]) -> Vector:
        """Build a dense marking from place labels; missing places hold 0"""
        offsets = {label: i for i, label in enumerate(self.places)}
        state = self.empty_vector()
        for label, tokens in marking.items():
            if label not in offsets:
                raise UnknownPlace(f"No place named {label!r}")
            state[offsets[label]] = tokens
        return state
