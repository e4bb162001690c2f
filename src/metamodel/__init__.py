"""
Metamodel - Vector addition state machines for Petri-net modeling.

- Declare nets with the builder DSL, arrow diagrams or pflow JSON.
- Compile them into dense vector addition state machines.
- Fire transitions under Petri net, elementary or workflow semantics.
"""

import logging

from .config import MetamodelConfig, configure, get_config, reset_config
from .exceptions import (
    MetamodelError,
    CompileError,
    DanglingArcReference,
    InvalidArc,
    InvalidInitialMarking,
    InvalidCapacity,
    InvalidModelType,
    InvalidOffset,
    OffsetOverflow,
    UnknownAction,
    UnknownPlace,
    BuilderError,
    DiagramSyntaxError,
    GraphFormatError,
)
from .net import (
    ModelType,
    NetSpec,
    NetBuilder,
    pn,
    from_diagram,
    from_state_diagram,
    from_json_str,
    from_json_value,
    to_json_str,
    to_json_value,
    Zblob,
)
from .vasm import StateMachine, Transaction, compile
from .model import Model

# Library does not configure handlers by default. Callers may configure logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Config
    "MetamodelConfig",
    "configure",
    "get_config",
    "reset_config",
    # Errors
    "MetamodelError",
    "CompileError",
    "DanglingArcReference",
    "InvalidArc",
    "InvalidInitialMarking",
    "InvalidCapacity",
    "InvalidModelType",
    "InvalidOffset",
    "OffsetOverflow",
    "UnknownAction",
    "UnknownPlace",
    "BuilderError",
    "DiagramSyntaxError",
    "GraphFormatError",
    # Nets
    "ModelType",
    "NetSpec",
    "NetBuilder",
    "pn",
    "from_diagram",
    "from_state_diagram",
    "from_json_str",
    "from_json_value",
    "to_json_str",
    "to_json_value",
    "Zblob",
    # Machines
    "StateMachine",
    "Transaction",
    "compile",
    "Model",
]
