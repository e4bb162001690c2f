#!/usr/bin/env python3
"""
metamodel.net - Declarative Petri net graphs

Public API for declaring nets with the builder DSL, parsing them from
diagrams and JSON, and packing them into share blobs.
"""

from .specs import (
    ModelType,
    PlaceSpec,
    TransitionSpec,
    ArcSpec,
    NetSpec,
    PlaceRef,
    TransitionRef,
)

from .builder import (
    NetBuilder,
    ArcChain,
    PetriNetDSL,
    pn,
)

from .diagram import from_diagram, from_state_diagram

from .io import from_json_str, from_json_value, to_json_str, to_json_value

from .zblob import Zblob, decode_share_url

__all__ = [
    # Specification types
    'ModelType',
    'PlaceSpec',
    'TransitionSpec',
    'ArcSpec',
    'NetSpec',

    # Reference types
    'PlaceRef',
    'TransitionRef',

    # Builder
    'NetBuilder',
    'ArcChain',
    'PetriNetDSL',
    'pn',

    # Loaders
    'from_diagram',
    'from_state_diagram',
    'from_json_str',
    'from_json_value',
    'to_json_str',
    'to_json_value',
    'Zblob',
    'decode_share_url',
]
