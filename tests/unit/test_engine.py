"""Unit tests for RoundEngine."""

from dataclasses import dataclass

import pytest

from pnsim.core import (
    DuplicateDeliveryError,
    EngineConfig,
    MessageCountError,
    RoundEngine,
    RoundLimitExceeded,
    Topology,
    TopologyError,
    path,
    ring,
)
from pnsim.algorithms import Counter


@dataclass(frozen=True)
class Summing:
    """Broadcasts its value; new value is the sum of what arrived."""

    def init(self, k, value):
        return value

    def send(self, k, state):
        return [state] * k

    def receive(self, state, inbox):
        return sum(inbox)


@dataclass(frozen=True)
class PortEcho:
    """Sends its port number on every port; keeps what arrived."""

    def init(self, k, value):
        return ()

    def send(self, k, state):
        return list(range(k))

    def receive(self, state, inbox):
        return tuple(inbox)


@dataclass(frozen=True)
class Silent:
    """Sends None on every port."""

    def init(self, k, value):
        return None

    def send(self, k, state):
        return [None] * k

    def receive(self, state, inbox):
        return inbox


@dataclass(frozen=True)
class Overtalker:
    """Sends one message too many."""

    def init(self, k, value):
        return None

    def send(self, k, state):
        return [None] * (k + 1)

    def receive(self, state, inbox):
        return state


class TestConstruction:
    """Tests for engine setup."""

    def test_init_states(self, ring4):
        engine = RoundEngine(ring4, Counter(), [True, False, False, False])
        assert engine.round == 0
        assert engine.states[0].holding is True
        assert all(not s.holding for s in engine.states[1:])

    def test_input_length_mismatch(self, ring4):
        with pytest.raises(ValueError):
            RoundEngine(ring4, Counter(), [True, False])

    def test_validate_topology_opt_in(self):
        broken = Topology([[(1, 0)], [(1, 0)]])
        # Not checked by default
        RoundEngine(broken, Summing(), [1, 2])
        with pytest.raises(TopologyError):
            RoundEngine(broken, Summing(), [1, 2], EngineConfig(validate_topology=True))

    def test_default_config(self):
        cfg = EngineConfig()
        assert cfg.validate_topology is False
        assert cfg.record_history is False
        assert cfg.max_rounds == 10_000


class TestStep:
    """Tests for one synchronous round."""

    def test_sends_use_previous_round_states(self):
        engine = RoundEngine(path(3), Summing(), [1, 2, 3])
        engine.step()
        # Node 1 must see node 0's OLD value 1, not its new value 2
        assert engine.states == (2, 4, 2)

    def test_messages_arrive_on_wired_port(self, ring4):
        engine = RoundEngine(ring4, PortEcho(), [None] * 4)
        engine.step()
        # Port 0 hears the previous node's port 1 and vice versa
        assert engine.states == ((1, 0),) * 4

    def test_round_counter(self, ring4):
        engine = RoundEngine(ring4, Summing(), [0] * 4)
        engine.step()
        engine.step()
        assert engine.round == 2

    def test_conservation(self, ring4):
        engine = RoundEngine(ring4, Summing(), [1] * 4)
        stats = engine.step()
        assert stats.round == 1
        assert stats.messages_sent == 8
        assert stats.slots_filled == 8
        assert stats.messages_delivered == 8
        assert engine.stats == [stats]

    def test_counts_equal_slot_total(self):
        topo = path(5)
        slots = int(topo.degrees().sum())
        engine = RoundEngine(topo, Summing(), [1] * 5)
        engine.run(4)
        for stats in engine.stats:
            assert stats.messages_sent == stats.slots_filled == stats.messages_delivered == slots

    def test_none_messages_are_delivered(self):
        engine = RoundEngine(path(2), Silent(), [None, None])
        stats = engine.step()
        assert stats.slots_filled == 2
        assert engine.states == ((None,), (None,))

    def test_isolated_node(self):
        engine = RoundEngine(Topology([[]]), Summing(), [7])
        stats = engine.step()
        assert engine.states == (0,)
        assert stats.messages_sent == 0


class TestContractViolations:
    """Tests for fatal delivery errors."""

    def test_wrong_message_count(self, ring4):
        engine = RoundEngine(ring4, Overtalker(), [None] * 4)
        with pytest.raises(MessageCountError) as info:
            engine.step()
        assert info.value.node == 0
        assert "node 0" in str(info.value)

    def test_double_write(self):
        engine = RoundEngine(Topology([[(1, 0)], [(1, 0)]]), Summing(), [1, 2])
        with pytest.raises(DuplicateDeliveryError) as info:
            engine.step()
        assert info.value.node == 1
        assert info.value.port == 0

    def test_failed_round_leaves_states(self):
        engine = RoundEngine(Topology([[(1, 0)], [(1, 0)]]), Summing(), [1, 2])
        with pytest.raises(DuplicateDeliveryError):
            engine.step()
        assert engine.round == 0
        assert engine.states == (1, 2)


class TestDriving:
    """Tests for run and run_until."""

    def test_run(self, ring4):
        engine = RoundEngine(ring4, Counter(), [True, False, False, False])
        summary = engine.run(3)
        assert summary["n_rounds"] == 3
        assert summary["current_round"] == 3
        assert summary["total_messages"] == 24

    def test_run_until(self, ring4):
        engine = RoundEngine(ring4, Counter(), [True, False, False, False])
        rounds = engine.run_until(lambda states: states[2].holding)
        assert rounds == 2

    def test_run_until_already_true(self, ring4):
        engine = RoundEngine(ring4, Counter(), [True, False, False, False])
        assert engine.run_until(lambda states: True) == 0
        assert engine.round == 0

    def test_run_until_limit(self, ring4):
        engine = RoundEngine(ring4, Counter(), [True, False, False, False])
        with pytest.raises(RoundLimitExceeded) as info:
            engine.run_until(lambda states: False, max_rounds=5)
        assert info.value.rounds == 5
        assert engine.round == 5

    def test_run_until_uses_config_bound(self, ring4):
        engine = RoundEngine(ring4, Counter(), [True, False, False, False],
                             EngineConfig(max_rounds=3))
        with pytest.raises(RoundLimitExceeded):
            engine.run_until(lambda states: False)
        assert engine.round == 3


class TestHistory:
    """Tests for recorded state history."""

    def test_history_off_by_default(self, ring4):
        engine = RoundEngine(ring4, Summing(), [1] * 4)
        engine.run(2)
        assert engine.history == []

    def test_history_includes_initial_states(self, ring4):
        engine = RoundEngine(ring4, Summing(), [1, 0, 0, 0], EngineConfig(record_history=True))
        engine.run(3)
        assert len(engine.history) == 4
        assert engine.history[0] == (1, 0, 0, 0)
        assert engine.history[-1] == engine.states

    def test_determinism(self):
        topo = ring(6)
        inputs = [True, False, False, True, False, False]
        runs = []
        for _ in range(2):
            engine = RoundEngine(topo, Counter(), inputs, EngineConfig(record_history=True))
            engine.run(10)
            runs.append(engine.history)
        assert runs[0] == runs[1]
