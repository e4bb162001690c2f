#!/usr/bin/env python3
"""
Metamodel Configuration

Global defaults used while building, parsing and compiling nets.
Nothing here is consulted during transform(); a compiled StateMachine
captures whatever it needs when it is built.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class MetamodelConfig:
    """
    Global configuration for metamodel.

    Attributes:
        default_role: Role assigned to transitions declared without one
        default_model_type: Model type of freshly created nets
        diagram_origin: (x, y) of the first node laid out by the diagram parsers
        diagram_grid: Horizontal spacing between nodes laid out by the diagram parsers
        strict_workflow_bounds: Gate workflow firings on overflow/underflow too
    """
    default_role: str = "default"
    default_model_type: str = "petriNet"
    diagram_origin: Tuple[int, int] = (20, 200)
    diagram_grid: int = 80
    strict_workflow_bounds: bool = False


# Global state
_config: Optional[MetamodelConfig] = None


def configure(**fields) -> MetamodelConfig:
    """
    Configure metamodel defaults.

    Only the given fields change; the rest keep their current values.

    Example:
        ```python
        import metamodel

        metamodel.configure(default_role="operator", diagram_grid=120)
        ```
    """
    global _config
    _config = replace(get_config(), **fields)
    return _config


def get_config() -> MetamodelConfig:
    """Return the active configuration, creating the default on first use."""
    global _config
    if _config is None:
        _config = MetamodelConfig()
    return _config


def reset_config() -> None:
    """Restore the default configuration."""
    global _config
    _config = None
