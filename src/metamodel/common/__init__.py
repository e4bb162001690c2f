"""
Common utilities shared by the net and vasm layers.
"""

from metamodel.common.mermaid import (
    escape_label,
    format_place_node,
    format_transition_node,
    format_arc,
    format_comment,
)

__all__ = [
    "escape_label",
    "format_place_node",
    "format_transition_node",
    "format_arc",
    "format_comment",
]
