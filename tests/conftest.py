"""Shared fixtures for metamodel tests"""

from pathlib import Path

import pytest

from metamodel.config import reset_config
from metamodel.net import NetBuilder

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clear_config():
    """Restore default configuration after each test.

    configure() replaces a module-level global, so a test that changes
    it would otherwise leak into every test that runs after it.
    """
    yield
    reset_config()


@pytest.fixture
def dining_philosophers_json() -> str:
    return (FIXTURES / "dining_philosophers.json").read_text()


@pytest.fixture
def counter_net():
    """One bounded place p0 (capacity 3, empty) and four transitions.

    t0 produces 1 into p0, t1 consumes 3 from p0, t2 is blocked while p0
    holds 3 or more tokens, t3 is blocked while p0 holds any token.
    """
    builder = NetBuilder("petriNet")
    p0 = builder.cell("p0", initial=0, capacity=3)
    t0 = builder.func("t0")
    t1 = builder.func("t1")
    t2 = builder.func("t2")
    t3 = builder.func("t3")

    builder.arrow(t0, p0, 1)
    builder.arrow(p0, t1, 3)
    builder.guard(t2, p0, 3, read=False)
    builder.guard(p0, t3, 1)
    return builder.build()


@pytest.fixture
def chain_workflow():
    """A --> step --> B, starting in A"""
    builder = NetBuilder("workflow")
    a = builder.cell("A", initial=1)
    b = builder.cell("B")
    step = builder.func("step")
    builder.arrow(a, step).arrow(b)
    return builder.build()
