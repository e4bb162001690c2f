#!/usr/bin/env python3
"""
Coffee Brewing Demo
- Parse a Petri net from an arrow diagram
- Seed water and beans
- Fire transitions until nothing is enabled
- Print the marking at each step and the Mermaid diagram
"""

import logging

from metamodel import Model

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


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


def main():
    print("=" * 50)
    print("Coffee Brewing Demo")
    print("=" * 50)

    model = Model.from_diagram(COFFEE)
    vm = model.vm
    state = vm.vector({"Water": 2, "CoffeeBeans": 2})
    logger.info(f"[start] {vm.marking(state)}")

    while True:
        enabled = vm.enabled_actions(state)
        if not enabled:
            break
        res = vm.transform(state, enabled[0])
        state = res.output
        logger.info(f"[{res.action}] {vm.marking(state)}")

    print(f"\n✓ Brewed {vm.marking(state)['Coffee']} cups")
    print("\nMermaid Diagram:")
    print("-" * 40)
    print(model.to_mermaid())
    print("-" * 40)
    print(f"\nShare link: {model.to_zblob().to_url()}")


if __name__ == "__main__":
    main()
