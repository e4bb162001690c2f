#!/usr/bin/env python3
"""
Tests for the arrow diagram parsers.

Run with: pytest tests/net/test_diagram.py -v
"""

import pytest

import metamodel
from metamodel.exceptions import DiagramSyntaxError
from metamodel.net import ModelType, from_diagram, from_state_diagram
from metamodel.net.diagram import parse_model_type
from metamodel.vasm import compile

COFFEE = """
ModelType::PetriNet;
Water --> boil_water;
boil_water --> BoiledWater;
BoiledWater --> brew;
CoffeeBeans --> grind;
grind --> Grounds;
Grounds --> brew;
brew --> Coffee;
"""

TRAFFIC = """
[*] --> Still;
Still --> Moving;
Moving --> Still;
Moving --> Crash;
"""


# =============================================================================
# Petri net diagrams
# =============================================================================


class TestCoffeeDiagram:
    """Brewing coffee from water and beans"""

    def test_places_and_transitions(self):
        net = from_diagram(COFFEE)
        assert net.model_type == "petriNet"
        assert list(net.places) == ["Water", "BoiledWater", "CoffeeBeans", "Grounds", "Coffee"]
        assert list(net.transitions) == ["boil_water", "brew", "grind"]
        assert len(net.arcs) == 7

    def test_arc_directions(self):
        net = from_diagram(COFFEE)
        first, second = net.arcs[0], net.arcs[1]
        assert (first.consume, first.produce) == (True, False)
        assert (second.consume, second.produce) == (False, True)

    def test_layout(self):
        net = from_diagram(COFFEE)
        assert (net.places["Water"].x, net.places["Water"].y) == (100, 200)
        assert net.transitions["boil_water"].x == 180
        assert net.places["BoiledWater"].x == 260

    def test_brews(self):
        vm = compile(from_diagram(COFFEE))
        state = vm.vector({"Water": 1, "CoffeeBeans": 1})
        for action in ["boil_water", "grind", "brew"]:
            res = vm.transform(state, action)
            assert res.ok is True, action
            state = res.output
        assert vm.marking(state)["Coffee"] == 1
        assert sum(state) == 1

    def test_nothing_enabled_without_tokens(self):
        vm = compile(from_diagram(COFFEE))
        assert vm.enabled_actions(vm.initial_vector()) == []


def test_layout_follows_config():
    metamodel.configure(diagram_origin=(0, 0), diagram_grid=10)
    net = from_diagram("ModelType::PetriNet; Water --> boil;")
    assert (net.places["Water"].x, net.places["Water"].y) == (10, 0)
    assert net.transitions["boil"].x == 20


@pytest.mark.parametrize("header, expected", [
    ("ModelType::PetriNet", ModelType.PETRI_NET),
    ("ModelType::petrinet", ModelType.PETRI_NET),
    ("ModelType::Workflow", ModelType.WORKFLOW),
    ("ModelType::ELEMENTARY", ModelType.ELEMENTARY),
])
def test_parse_model_type(header, expected):
    assert parse_model_type(header) is expected


def test_statements_without_arrow_are_skipped():
    net = from_diagram("ModelType::Elementary; just a note; On --> flip;")
    assert net.model_type == "elementary"
    assert list(net.places) == ["On"]


class TestDiagramErrors:
    """Malformed diagrams raise DiagramSyntaxError"""

    def test_empty(self):
        with pytest.raises(DiagramSyntaxError):
            from_diagram("  \n ")

    def test_missing_header(self):
        with pytest.raises(DiagramSyntaxError, match="ModelType"):
            from_diagram("Water --> boil;")

    def test_unknown_model_type(self):
        with pytest.raises(DiagramSyntaxError):
            from_diagram("ModelType::Colored; Water --> boil;")

    def test_two_places(self):
        with pytest.raises(DiagramSyntaxError, match="two places"):
            from_diagram("ModelType::PetriNet; Water --> Coffee;")

    def test_two_transitions(self):
        with pytest.raises(DiagramSyntaxError, match="two transitions"):
            from_diagram("ModelType::PetriNet; boil --> brew;")

    def test_missing_endpoint(self):
        with pytest.raises(DiagramSyntaxError):
            from_diagram("ModelType::PetriNet; --> brew;")


# =============================================================================
# State diagrams
# =============================================================================


class TestStateDiagram:
    """Each statement becomes a workflow transition between two states"""

    def test_structure(self):
        net = from_state_diagram(TRAFFIC)
        assert net.model_type == "workflow"
        assert list(net.places) == ["[*]", "Still", "Moving", "Crash"]
        assert list(net.transitions) == [
            "[*]-->Still",
            "Still-->Moving",
            "Moving-->Still",
            "Moving-->Crash",
        ]
        assert len(net.arcs) == 8

    def test_walk(self):
        vm = compile(from_state_diagram(TRAFFIC))
        state = vm.vector({"[*]": 1})
        for action, current in [
            ("[*]-->Still", "Still"),
            ("Still-->Moving", "Moving"),
            ("Moving-->Crash", "Crash"),
        ]:
            res = vm.transform(state, action)
            assert res.ok is True
            assert res.output == vm.vector({current: 1})
            state = res.output

    def test_wrong_state_has_two_active_places(self):
        vm = compile(from_state_diagram(TRAFFIC))
        res = vm.transform(vm.vector({"Still": 1}), "Moving-->Crash")
        assert res.ok is False
        assert res.underflow is True

    def test_missing_endpoint(self):
        with pytest.raises(DiagramSyntaxError):
            from_state_diagram("Still --> ;")
