"""
Tests for ring construction, finger tables and lookups.
"""

import pytest
from chord.errors import ChordError, NotInitializedError
from chord.node import NodeType
from chord.protocol import ChordProtocol
from chord.response import LookUpResponse
from communication.network import Network


def routing_ids(protocol):
    return {
        node.get_name(): [f.get_id() for f in node.get_routing_table()]
        for _, node in protocol.ring
    }


class TestOverlayNetwork:
    """Test ring construction."""

    def test_identifiers_assigned(self, three_node_protocol, three_node_network):
        topology = three_node_network.get_topology()
        assert topology["N1"].get_id() == 1
        assert topology["N3"].get_id() == 3
        assert topology["N6"].get_id() == 6
        assert three_node_protocol.ring.identifiers() == [1, 3, 6]

    def test_successors_wrap(self, three_node_network, three_node_protocol):
        topology = three_node_network.get_topology()
        assert topology["N1"].get_successor() is topology["N3"]
        assert topology["N3"].get_successor() is topology["N6"]
        assert topology["N6"].get_successor() is topology["N1"]

    def test_predecessors(self, three_node_network, three_node_protocol):
        topology = three_node_network.get_topology()
        assert topology["N1"].get_neighbor(NodeType.PREDECESSOR) is topology["N6"]
        assert topology["N3"].get_neighbor(NodeType.PREDECESSOR) is topology["N1"]

    def test_following_successors_visits_ring_once(self):
        """Walking successors from any node cycles through the ring in order."""
        protocol = ChordProtocol(8)
        protocol.set_network(Network.with_peers(20))
        ring = protocol.build_overlay_network()

        for start_id, start in ring:
            node, ids = start, []
            for _ in range(len(ring)):
                ids.append(node.get_id())
                node = node.get_successor()
            assert node is start
            assert sorted(ids) == ring.identifiers()
            descents = sum(1 for a, b in zip(ids, ids[1:]) if b < a)
            assert descents == (0 if start_id == ring.identifiers()[0] else 1)

    def test_single_node_is_own_successor(self, fixed_hash):
        protocol = ChordProtocol(3, hash_function=fixed_hash({"Solo": 4}))
        network = Network(["Solo"])
        protocol.set_network(network)
        protocol.build_overlay_network()

        solo = network.get_node("Solo")
        assert solo.get_successor() is solo

    def test_requires_network(self):
        with pytest.raises(NotInitializedError):
            ChordProtocol(3).build_overlay_network()

    def test_empty_network(self):
        protocol = ChordProtocol(3)
        protocol.set_network(Network())
        ring = protocol.build_overlay_network()
        assert len(ring) == 0

        with pytest.raises(NotInitializedError):
            protocol.build_finger_table()

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            ChordProtocol(0)


class TestBuildFingerTable:
    """Test finger table construction over the ring."""

    def test_three_node_fingers(self, three_node_protocol):
        assert routing_ids(three_node_protocol) == {
            "N1": [3, 3, 6],
            "N3": [6, 6, 1],
            "N6": [1, 1, 3],
        }

    def test_every_table_has_m_ring_members(self):
        protocol = ChordProtocol(8)
        protocol.set_network(Network.with_peers(12))
        ring = protocol.build_overlay_network()
        protocol.build_finger_table()

        for identifier, node in ring:
            table = node.get_routing_table()
            assert len(table) == 8
            for i, finger in enumerate(table, start=1):
                assert finger.get_id() in ring
                start = (identifier + 2 ** (i - 1)) % 256
                assert finger is ring.find_successor(start)

    def test_rebuild_is_idempotent(self, three_node_protocol):
        before = routing_ids(three_node_protocol)
        three_node_protocol.build_finger_table()
        assert routing_ids(three_node_protocol) == before

    def test_requires_ring(self):
        protocol = ChordProtocol(3)
        protocol.set_network(Network(["a"]))
        with pytest.raises(NotInitializedError):
            protocol.build_finger_table()

    def test_finger_table_objects_kept(self, three_node_protocol):
        table = three_node_protocol.finger_tables[1]
        assert table.get_start(3) == 5
        assert table.get_finger(3).get_name() == "N6"


class TestLookUp:
    """Test the lookup traversal."""

    def test_key_on_third_node(self, three_node_network, three_node_protocol):
        three_node_network.get_node("N6").add_data(5)

        response = three_node_protocol.look_up(5)

        assert response.node_index == 6
        assert response.node_name == "N6"
        assert response.visited_peers == ["N1", "N3", "N6"]
        assert not response.degraded

    def test_key_owned_by_successor(self, three_node_protocol):
        response = three_node_protocol.look_up(2)
        assert response.node_index == 3
        assert response.visited_peers == ["N1", "N3"]

    def test_wraparound_key(self, three_node_protocol):
        response = three_node_protocol.look_up(7)
        assert response.node_index == 1
        assert response.visited_peers == ["N1", "N6"]
        assert response.hop_count == 2

    def test_key_at_entry_node(self, three_node_protocol):
        """Identifier 1 belongs to N1 even though the walk starts there."""
        response = three_node_protocol.look_up(1)
        assert response.node_index == 1
        assert response.visited_peers == ["N1", "N3", "N6"]

    def test_held_key_stops_early(self, three_node_network, three_node_protocol):
        three_node_network.get_node("N1").add_data(5)
        response = three_node_protocol.look_up(5)
        assert response.node_name == "N1"
        assert response.visited_peers == ["N1"]

    def test_every_identifier_resolves_to_owner(self, three_node_protocol):
        for identifier in range(8):
            response = three_node_protocol.look_up(identifier)
            expected = three_node_protocol.find_responsible_node(identifier)
            assert response.node_index == expected.get_id()
            assert response.hop_count <= three_node_protocol.hop_limit

    def test_key_index_reduced(self, three_node_protocol):
        assert three_node_protocol.look_up(13).node_index == 6

    def test_lookup_is_read_only(self, three_node_network, three_node_protocol):
        before = routing_ids(three_node_protocol)
        successors = {n: node.get_successor() for n, node in three_node_network.get_topology().items()}

        for identifier in range(8):
            three_node_protocol.look_up(identifier)

        assert routing_ids(three_node_protocol) == before
        assert three_node_protocol.ring.identifiers() == [1, 3, 6]
        for name, node in three_node_network.get_topology().items():
            assert node.get_successor() is successors[name]

    def test_single_node_owns_everything(self, fixed_hash):
        protocol = ChordProtocol(3, hash_function=fixed_hash({"Solo": 4}))
        protocol.set_network(Network(["Solo"]))
        protocol.build_overlay_network()
        protocol.build_finger_table()

        for identifier in range(8):
            response = protocol.look_up(identifier)
            assert response.node_name == "Solo"
            assert response.visited_peers == ["Solo"]

    def test_large_ring_correct(self):
        protocol = ChordProtocol(10)
        protocol.set_network(Network.with_peers(40))
        protocol.build_overlay_network()
        protocol.build_finger_table()

        for identifier in range(0, 1024, 7):
            response = protocol.look_up(identifier)
            assert response.node_index == protocol.find_responsible_node(identifier).get_id()
            assert response.hop_count <= protocol.hop_limit
            assert not response.degraded

    def test_hop_limit(self):
        assert ChordProtocol(3).hop_limit == 3 * 3 + 8
        assert ChordProtocol(5, hop_limit_factor=2).hop_limit == 2 * 5 + 32

    def test_hop_limit_returns_degraded(self, monkeypatch, three_node_protocol):
        monkeypatch.setattr(ChordProtocol, "hop_limit", property(lambda self: 1))

        response = three_node_protocol.look_up(4)

        assert response.degraded
        assert response.visited_peers == ["N1"]
        assert response.node_name == "N3"

    def test_requires_finger_tables(self, three_node_network):
        protocol = ChordProtocol(3)
        with pytest.raises(NotInitializedError):
            protocol.look_up(1)

        protocol.set_network(three_node_network)
        protocol.build_overlay_network()
        with pytest.raises(NotInitializedError):
            protocol.look_up(1)

    def test_errors_share_base(self):
        assert issubclass(NotInitializedError, ChordError)

    def test_look_up_key(self, three_node_protocol):
        three_node_protocol.set_keys({"movie": 5})
        assert three_node_protocol.look_up_key("movie").node_name == "N6"
        with pytest.raises(KeyError):
            three_node_protocol.look_up_key("missing")


class TestLookUpResponse:
    """Test response rendering."""

    def test_str(self):
        response = LookUpResponse(("N1", "N3", "N6"), 6, "N6")
        assert str(response) == (
            "----------LOOKUP RESPONSE----------\n"
            "peers : N1 N3 N6  hop count : 3 node index : 6 node name : N6\n"
            "----------END LOOKUP RESPONSE\n"
        )

    def test_from_visited_dedups_in_order(self):
        response = LookUpResponse.from_visited(["b", "a", "b", "c"], 2, "c")
        assert response.peers_looked_up == ("b", "a", "c")
        assert response.hop_count == 3

    def test_immutable(self):
        response = LookUpResponse(("a",), 1, "a")
        with pytest.raises(AttributeError):
            response.node_index = 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
