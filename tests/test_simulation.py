"""
Tests for the network topology and the simulation harness.
"""

import pytest

import config
from communication.network import Network
from simulation.simulator import Simulator


class TestNetwork:
    """Test the topology provider."""

    def test_order_preserved(self):
        network = Network(["c", "a", "b"])
        assert list(network.get_topology()) == ["c", "a", "b"]
        assert list(network.get_topology()) == list(network.get_topology())

    def test_with_peers(self):
        network = Network.with_peers(3, prefix="P")
        assert list(network.get_topology()) == ["P0", "P1", "P2"]
        assert len(network) == 3
        assert "P1" in network

    def test_duplicate_name(self):
        network = Network(["a"])
        with pytest.raises(ValueError):
            network.add_node("a")

    def test_topology_is_a_copy(self):
        network = Network(["a"])
        network.get_topology().clear()
        assert network.get_node("a") is not None


class TestSimulator:
    """Test end-to-end runs."""

    def test_keys_stored_on_owner(self, fixed_hash):
        identifiers = {"N1": 1, "N3": 3, "N6": 6, "k2": 2, "k5": 5, "k7": 7}
        simulator = Simulator(m=3, node_names=["N1", "N3", "N6"],
                              key_names=["k2", "k5", "k7"],
                              hash_function=fixed_hash(identifiers)).setup()

        network = simulator.network
        assert network.get_node("N3").get_data() == {2}
        assert network.get_node("N6").get_data() == {5}
        assert network.get_node("N1").get_data() == {7}

    def test_run_lookups(self, fixed_hash):
        identifiers = {"N1": 1, "N3": 3, "N6": 6, "k5": 5}
        simulator = Simulator(m=3, node_names=["N1", "N3", "N6"], key_names=["k5"],
                              hash_function=fixed_hash(identifiers))

        responses = simulator.run_lookups()

        assert list(responses) == ["k5"]
        assert responses["k5"].node_name == "N6"
        assert responses["k5"].visited_peers[0] == "N1"
        assert responses["k5"].visited_peers[-1] == "N6"

    def test_sha1_ring_verifies(self):
        simulator = Simulator(m=8, num_nodes=16, num_keys=50)
        assert simulator.verify() == []

        for response in simulator.run_lookups().values():
            assert response.hop_count <= simulator.protocol.hop_limit

    def test_default_names(self):
        simulator = Simulator(m=6, num_nodes=3, num_keys=2)
        assert list(simulator.network.get_topology()) == [
            f"{config.NODE_NAME_PREFIX}{i}" for i in range(3)]
        assert simulator.key_names == [f"{config.KEY_NAME_PREFIX}{i}" for i in range(2)]

    def test_look_up_by_name(self):
        simulator = Simulator(m=8, num_nodes=5, num_keys=3)
        response = simulator.look_up(f"{config.KEY_NAME_PREFIX}0")
        index = simulator.key_indexes[f"{config.KEY_NAME_PREFIX}0"]
        assert response.node_index == simulator.protocol.find_responsible_node(index).get_id()

        with pytest.raises(KeyError):
            simulator.look_up("nope")

    def test_describe(self, fixed_hash):
        identifiers = {"N1": 1, "N3": 3, "N6": 6, "k5": 5}
        simulator = Simulator(m=3, node_names=["N1", "N3", "N6"], key_names=["k5"],
                              hash_function=fixed_hash(identifiers))

        lines = simulator.describe_ring()
        assert len(lines) == 3
        assert "N6" in lines[2] and "keys=[5]" in lines[2]
        assert len(simulator.describe_fingers()) == 3

    def test_needs_a_node(self):
        with pytest.raises(ValueError):
            Simulator(m=3, num_nodes=0)


class TestConfig:
    """Test configuration validation."""

    def test_defaults_valid(self):
        assert config.validate_config()["valid"]

    def test_too_many_nodes(self):
        summary = config.validate_config(m=3, num_nodes=9, num_keys=1)
        assert not summary["valid"]
        assert summary["ring_size"] == 8
        assert summary["hop_limit"] == 3 * 3 + 8


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
