"""
Demo: a token walking around a 4-cycle.

Node 0 starts with the token. Each round the holder forwards it on every
port except the one it arrived on, so on a ring it moves one hop per
round and every node's counter goes up once per lap.
"""

import logging

from pnsim.core import RoundEngine, EngineConfig, ring
from pnsim.algorithms import Counter, token_holders


def main(n_rounds: int = 8):
    """Run the counter for a fixed number of rounds and print each state."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Token Counter on a 4-cycle")
    print("=" * 60)

    topology = ring(4)
    engine = RoundEngine(
        topology,
        Counter(),
        [True, False, False, False],
        EngineConfig(validate_topology=True),
    )

    print(f"\nround {engine.round:2d}: {list(engine.states)}")
    for _ in range(n_rounds):
        engine.step()
        print(f"round {engine.round:2d}: holder={token_holders(engine.states)} "
              f"counts={[s.count for s in engine.states]}")

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
