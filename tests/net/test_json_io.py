#!/usr/bin/env python3
"""
Tests for reading and writing nets as JSON documents.

Run with: pytest tests/net/test_json_io.py -v
"""

import json

import pytest

from metamodel.exceptions import GraphFormatError
from metamodel.net import NetBuilder, from_json_str, from_json_value, to_json_str, to_json_value
from metamodel.vasm import compile


def test_load_dining_philosophers(dining_philosophers_json):
    net = from_json_str(dining_philosophers_json)
    assert net.model_type == "petriNet"
    assert net.version == "v0"
    assert len(net.places) == 15
    assert len(net.transitions) == 10
    assert len(net.arcs) == 40
    assert net.places["chopstick1"].initial == 1
    assert net.places["left1"].initial is None
    assert net.transitions["think1"].offset == 1


def test_load_infers_arc_attributes(dining_philosophers_json):
    net = from_json_str(dining_philosophers_json)
    arc = net.arcs[0]
    assert (arc.source, arc.target) == ("chopstick1", "eat1")
    assert (arc.consume, arc.produce, arc.read, arc.inhibit) == (True, False, False, None)
    assert arc.weight == 1


def test_round_trip_is_stable(dining_philosophers_json):
    net = from_json_str(dining_philosophers_json)
    again = from_json_str(to_json_str(net))
    assert again == net
    assert to_json_str(again) == to_json_str(net)


def test_canonical_json(counter_net):
    text = to_json_str(counter_net)
    assert " " not in text
    assert text.startswith('{"arcs":')
    assert json.loads(text) == to_json_value(counter_net)


def test_builder_net_compiles_the_same_after_round_trip(counter_net):
    reloaded = from_json_str(to_json_str(counter_net))
    assert compile(reloaded) == compile(counter_net)


def test_value_uses_camel_case():
    builder = NetBuilder("workflow")
    builder.cell("A", initial=1)
    builder.func("retry", allow_reentry=True)
    value = to_json_value(builder.build())
    assert value["modelType"] == "workflow"
    assert value["transitions"]["retry"]["allowReentry"] is True
    assert "capacity" not in value["places"]["A"]


def test_load_from_value():
    net = from_json_value({
        "modelType": "workflow",
        "places": {"A": {"offset": 0, "initial": 1}},
        "transitions": {"go": {"offset": 0, "allowReentry": True}},
        "arcs": [{"source": "A", "target": "go", "weight": 2}],
    })
    assert net.model_type == "workflow"
    assert net.transitions["go"].allow_reentry is True
    assert net.transitions["go"].role is None
    assert net.arcs[0].weight == 2
    assert compile(net).transitions["go"].role == "default"


def test_missing_sections_default_to_empty():
    net = from_json_value({})
    assert net.model_type == "petriNet"
    assert net.places == {}
    assert net.arcs == []


class TestMalformedDocuments:
    """Invalid documents raise GraphFormatError"""

    def test_not_json(self):
        with pytest.raises(GraphFormatError):
            from_json_str("{not json")

    def test_place_without_offset(self):
        with pytest.raises(GraphFormatError):
            from_json_value({"places": {"p": {"x": 1}}})

    def test_arc_without_target(self):
        with pytest.raises(GraphFormatError):
            from_json_str('{"arcs": [{"source": "a"}]}')

    def test_wrong_type(self):
        with pytest.raises(GraphFormatError):
            from_json_value({"places": {"p": {"offset": "first"}}})

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            from_json_value({"arcs": "none"})
