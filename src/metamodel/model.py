#!/usr/bin/env python3
"""
Model - a net bundled with its compiled state machine.

The machine is rebuilt whenever the net changes through the model.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Optional

from .net.builder import NetBuilder
from .net.diagram import MODEL_TYPE_PREFIX, from_diagram, from_state_diagram
from .net.io import from_json_str, from_json_value, to_json_str
from .net.specs import NetSpec
from .net.zblob import Zblob
from .vasm.compiler import compile
from .vasm.machine import StateMachine


class Model:
    """A NetSpec and the StateMachine compiled from it"""

    def __init__(self, net: Optional[NetSpec] = None):
        self.net = net if net is not None else NetSpec()
        self.vm: StateMachine = compile(self.net)

    @classmethod
    def new(cls, func: Callable[[NetBuilder], Any]) -> "Model":
        """Create a model from a builder function"""
        return cls().declare(func)

    def declare(self, func: Callable[[NetBuilder], Any]) -> "Model":
        """Apply a builder function to the held net and recompile.

        Returns the model itself so calls can be chained.
        """
        builder = NetBuilder(spec=self.net)
        func(builder)
        self.net = builder.build()
        self.vm = compile(self.net)
        return self

    @classmethod
    def from_diagram(cls, contents: str) -> "Model":
        """Parse a Petri net diagram, or a state diagram when no ModelType is given"""
        if MODEL_TYPE_PREFIX in contents:
            return cls(from_diagram(contents))
        return cls(from_state_diagram(contents))

    @classmethod
    def from_json_str(cls, contents: str) -> "Model":
        return cls(from_json_str(contents))

    @classmethod
    def from_json_value(cls, contents: Any) -> "Model":
        return cls(from_json_value(contents))

    def to_json_str(self) -> str:
        return to_json_str(self.net)

    def to_zblob(self) -> Zblob:
        return Zblob.from_net(self.net)

    def to_mermaid(self) -> str:
        return self.net.to_mermaid()

    def copy(self) -> "Model":
        """Deep-copy the net and compile a fresh machine for it"""
        return Model(copy.deepcopy(self.net))

    def __repr__(self):
        return (
            f"Model({self.net.model_type}, places={len(self.net.places)}, "
            f"transitions={len(self.net.transitions)})"
        )
