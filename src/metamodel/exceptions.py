#!/usr/bin/env python3
"""
Metamodel exceptions.

All metamodel exceptions inherit from MetamodelError for easy catching.
Structural problems in a net surface as CompileError subclasses at compile
time; a transition that merely cannot fire is not an error (see Transaction).
"""


class MetamodelError(Exception):
    """Base exception for all metamodel errors."""


class CompileError(MetamodelError):
    """A net could not be compiled into a state machine."""


class DanglingArcReference(CompileError):
    """An arc names a place or transition absent from the net."""


class InvalidArc(CompileError):
    """An arc is neither a pure flow arc nor a pure guard arc."""


class InvalidInitialMarking(CompileError):
    """A place declares a negative initial token count."""


class InvalidCapacity(CompileError):
    """A place declares a negative capacity."""


class InvalidModelType(CompileError):
    """The declared model type is not one of petriNet, elementary, workflow."""


class InvalidOffset(CompileError):
    """Place or transition offsets are not dense and unique."""


class OffsetOverflow(InvalidOffset):
    """An offset falls outside the representable index range."""


class UnknownAction(MetamodelError, KeyError):
    """transform() was called with an action the machine does not define."""


class UnknownPlace(MetamodelError, KeyError):
    """A labelled marking names a place the machine does not define."""


class BuilderError(MetamodelError, ValueError):
    """Misuse of NetBuilder (bad weight, bad arc direction, sealed builder)."""


class DiagramSyntaxError(MetamodelError, ValueError):
    """A textual diagram could not be parsed."""


class GraphFormatError(MetamodelError, ValueError):
    """A serialized net (JSON document or share blob) is malformed."""
