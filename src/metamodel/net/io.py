#!/usr/bin/env python3
"""
Net - JSON Codec

Reads and writes nets in the camelCase JSON document format used by the
pflow editor:

    {
      "modelType": "petriNet",
      "version": "v0",
      "places": {"p0": {"offset": 0, "initial": 1, "capacity": 3, "x": 100, "y": 80}},
      "transitions": {"inc": {"offset": 0, "role": "default", "x": 40, "y": 80}},
      "arcs": [{"source": "inc", "target": "p0", "weight": 1}]
    }

Documents are validated with pydantic. Loading infers missing arc
attributes, the same way the editor does.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import GraphFormatError
from .specs import ArcSpec, NetSpec, PlaceSpec, TransitionSpec


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class PlaceDocument(_Document):
    offset: int
    initial: Optional[int] = None
    capacity: Optional[int] = None
    x: int = 0
    y: int = 0


class TransitionDocument(_Document):
    offset: int
    role: Optional[str] = None
    allow_reentry: Optional[bool] = None
    x: int = 0
    y: int = 0


class ArcDocument(_Document):
    source: str
    target: str
    weight: Optional[int] = None
    consume: Optional[bool] = None
    produce: Optional[bool] = None
    inhibit: Optional[bool] = None
    read: Optional[bool] = None


class NetDocument(_Document):
    model_type: str = "petriNet"
    version: str = "v0"
    places: Dict[str, PlaceDocument] = {}
    transitions: Dict[str, TransitionDocument] = {}
    arcs: List[ArcDocument] = []

    def to_spec(self) -> NetSpec:
        net = NetSpec(self.model_type, self.version)
        for label, p in self.places.items():
            net.places[label] = PlaceSpec(label, p.offset, p.initial, p.capacity, p.x, p.y)
        for label, t in self.transitions.items():
            net.transitions[label] = TransitionSpec(
                label, t.offset, t.role, bool(t.allow_reentry), t.x, t.y
            )
        for a in self.arcs:
            net.arcs.append(ArcSpec(
                a.source, a.target, 1 if a.weight is None else a.weight,
                a.consume, a.produce, a.inhibit, a.read,
            ))
        net.populate_arc_attributes()
        return net

    @classmethod
    def from_spec(cls, net: NetSpec) -> "NetDocument":
        return cls(
            model_type=net.model_type,
            version=net.version,
            places={
                label: PlaceDocument(
                    offset=p.offset, initial=p.initial, capacity=p.capacity, x=p.x, y=p.y
                )
                for label, p in net.places.items()
            },
            transitions={
                label: TransitionDocument(
                    offset=t.offset,
                    role=t.role,
                    allow_reentry=t.allow_reentry or None,
                    x=t.x,
                    y=t.y,
                )
                for label, t in net.transitions.items()
            },
            arcs=[
                ArcDocument(
                    source=a.source, target=a.target, weight=a.weight,
                    consume=a.consume, produce=a.produce, inhibit=a.inhibit, read=a.read,
                )
                for a in net.arcs
            ],
        )


def from_json_value(contents: Any) -> NetSpec:
    """Create a net from an already-decoded JSON value"""
    try:
        return NetDocument.model_validate(contents).to_spec()
    except ValidationError as e:
        raise GraphFormatError(f"Invalid net document: {e}") from e


def from_json_str(contents: str | bytes) -> NetSpec:
    """Create a net from a JSON string"""
    try:
        return NetDocument.model_validate_json(contents).to_spec()
    except ValidationError as e:
        raise GraphFormatError(f"Invalid net document: {e}") from e


def to_json_value(net: NetSpec) -> Dict[str, Any]:
    """Convert a net to a JSON-compatible dict, omitting unset attributes"""
    return NetDocument.from_spec(net).model_dump(by_alias=True, exclude_none=True)


def to_json_str(net: NetSpec) -> str:
    """Convert a net to canonical JSON (sorted keys, no whitespace)"""
    return json.dumps(to_json_value(net), sort_keys=True, separators=(",", ":"))
