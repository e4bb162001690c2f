#!/usr/bin/env python3
"""
metamodel.vasm - Vector Addition State Machines

Compile a net into a dense StateMachine and fire its transitions.
"""

from .vector import (
    Vector,
    VectorSum,
    Guard,
    vector_add,
    guards_inhibit,
    active_count,
    clamp_workflow,
)

from .machine import (
    Transition,
    Transaction,
    StateMachine,
)

from .compiler import compile

__all__ = [
    # Primitives
    'Vector',
    'VectorSum',
    'Guard',
    'vector_add',
    'guards_inhibit',
    'active_count',
    'clamp_workflow',

    # Engine
    'Transition',
    'Transaction',
    'StateMachine',

    # Compiler
    'compile',
]
