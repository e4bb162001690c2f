#!/usr/bin/env python3
"""
VASM - Vector Primitives

Bounded vector addition and guard evaluation shared by every firing rule.
Nothing here mutates its arguments; outputs are always fresh lists.
"""

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence, Tuple

Vector = List[int]


class VectorSum(NamedTuple):
    """Result of adding a scaled delta to a marking"""
    output: Vector
    ok: bool
    overflow: bool
    underflow: bool


@dataclass(frozen=True)
class Guard:
    """Threshold test on a single place.

    delta is -weight at the monitored place and zero elsewhere. A read
    guard requires the place to hold at least weight tokens; an inhibitor
    guard (read=False) blocks while it does.
    """
    delta: Tuple[int, ...]
    read: bool

    def inhibits(self, capacity: Sequence[int], state: Sequence[int], multiplier: int = 1) -> bool:
        threshold_met = vector_add(capacity, state, self.delta, multiplier).ok
        if self.read:
            return not threshold_met
        return threshold_met


def zero_vector(size: int) -> Vector:
    return [0] * size


def one_hot(size: int, offset: int, value: int) -> Tuple[int, ...]:
    """A vector of the given size holding value at offset and zero elsewhere"""
    vector = zero_vector(size)
    vector[offset] = value
    return tuple(vector)


def vector_add(
    capacity: Sequence[int],
    state: Sequence[int],
    delta: Sequence[int],
    multiplier: int = 1,
) -> VectorSum:
    """Compute state + delta * multiplier and check it against the bounds.

    underflow: some slot went negative.
    overflow: some bounded slot (capacity > 0) exceeds its capacity.
    """
    output = [s + d * multiplier for s, d in zip(state, delta, strict=True)]
    underflow = any(v < 0 for v in output)
    overflow = any(c > 0 and v > c for c, v in zip(capacity, output, strict=True))
    return VectorSum(output, not (underflow or overflow), overflow, underflow)


def guards_inhibit(
    capacity: Sequence[int],
    state: Sequence[int],
    guards: Iterable[Guard],
    multiplier: int = 1,
) -> bool:
    """True when any guard blocks the firing"""
    return any(guard.inhibits(capacity, state, multiplier) for guard in guards)


def active_count(vector: Sequence[int]) -> int:
    """Number of places holding at least one token"""
    return sum(1 for v in vector if v > 0)


def clamp_workflow(vector: Sequence[int]) -> Vector:
    """Collapse a raw workflow output to booleans.

    0 and -1 (a place vacated by a retry) become 0, anything else becomes 1.
    """
    return [0 if v in (0, -1) else 1 for v in vector]
