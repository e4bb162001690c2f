#!/usr/bin/env python3
"""
Shared Mermaid diagram formatting utilities.

Petri nets are drawn as Mermaid flowcharts: places as circles, transitions
as boxes, flow arcs as arrows and guard arcs as circle-headed edges. Node
ids are derived from offsets so arbitrary labels (``[*]``, ``A-->B``) stay
legal Mermaid.

Usage:
    from metamodel.common.mermaid import format_place_node, format_arc

    node = format_place_node("p0", "Water", tokens=1)
    edge = format_arc("p0", "t0", weight=2)
"""

from __future__ import annotations

from typing import Optional


def escape_label(label: str) -> str:
    """Escape a label for use inside a quoted Mermaid node label."""
    return label.replace('"', "#quot;")


def format_place_node(node_id: str, label: str, tokens: int = 0, capacity: int = 0) -> str:
    """
    Format a place node.

    Args:
        node_id: Unique node id (e.g. "p0")
        label: Place label
        tokens: Initial token count, shown when positive
        capacity: Capacity, shown when bounded

    Example:
        >>> format_place_node("p0", "Water", tokens=1)
        '    p0(("Water</br>1"))'
        >>> format_place_node("p1", "Cup", capacity=3)
        '    p1(("Cup</br>0/3"))'
    """
    text = escape_label(label)
    if capacity > 0:
        text = f"{text}</br>{tokens}/{capacity}"
    elif tokens > 0:
        text = f"{text}</br>{tokens}"
    return f'    {node_id}(("{text}"))'


def format_transition_node(node_id: str, label: str, role: Optional[str] = None) -> str:
    """
    Format a transition node, appending the role when it is not the default.

    Example:
        >>> format_transition_node("t0", "boil_water")
        '    t0["boil_water"]'
    """
    text = escape_label(label)
    if role and role != "default":
        text = f"{text}</br>[{escape_label(role)}]"
    return f'    {node_id}["{text}"]'


def format_arc(from_id: str, to_id: str, weight: int = 1, inhibit: bool = False) -> str:
    """
    Format an arc edge.

    Guard arcs use the circle-headed ``--o`` edge. Weights above one are
    shown as the edge label.

    Example:
        >>> format_arc("p0", "t0")
        '    p0 --> t0'
        >>> format_arc("t1", "p0", weight=3, inhibit=True)
        '    t1 --o|3| p0'
    """
    edge = f"    {from_id} --o" if inhibit else f"    {from_id} -->"
    if weight > 1:
        edge = f"{edge}|{weight}|"
    return f"{edge} {to_id}"


def format_comment(text: str) -> str:
    """
    Format a comment for Mermaid diagrams.

    Example:
        >>> format_comment("This is a comment")
        '    %% This is a comment'
    """
    return f"    %% {text}"
