"""
The Chord protocol over a simulated network.
"""

import logging
from typing import Dict, List, Optional

from .errors import NotInitializedError
from .hashing import ConsistentHashing
from .interval import Interval
from .node import NodeInterface, NodeType
from .response import LookUpResponse
from .ring import Ring
from .routing import FingerTable, closest_preceding_finger


class ChordProtocol:
    """
    Builds the Chord overlay for a network and resolves lookups on it.

    Usage order is fixed: set_network, build_overlay_network,
    build_finger_table, then any number of look_up calls. Lookups only read
    the ring and routing tables.
    """

    def __init__(self, m: int, hash_function=None, hop_limit_factor: int = 3):
        """
        Args:
            m: Bit size of identifier space (ring holds 2^m identifiers)
            hash_function: Object with hash(name) -> int; defaults to SHA-1
                consistent hashing over m bits
            hop_limit_factor: Multiplier of m in the lookup hop bound
        """
        if m < 1:
            raise ValueError(f"identifier width must be positive, got m={m}")
        self.m = m
        self.ring_size = 2 ** m
        self.hop_limit_factor = hop_limit_factor

        self.network = None
        self.ch = None
        self.set_hash_function(hash_function)

        # key name -> key index, used by the simulator to drive lookups
        self.key_indexes: Dict[str, int] = {}

        self.ring: Optional[Ring] = None
        self.finger_tables: Dict[int, FingerTable] = {}
        self._fingers_built = False

        self.logger = logging.getLogger("ChordProtocol")

    # ==================== Configuration ====================

    def set_hash_function(self, hash_function=None):
        """Set the hash function, defaulting to ConsistentHashing(m)."""
        self.ch = hash_function if hash_function is not None else ConsistentHashing(self.m)

    def set_network(self, network):
        """
        Set the network whose topology will be placed on the ring.

        Args:
            network: Object with get_topology() -> ordered {name: node}
        """
        self.network = network
        self.ring = None
        self.finger_tables = {}
        self._fingers_built = False

    def get_network(self):
        return self.network

    def set_keys(self, key_indexes: Dict[str, int]):
        """
        Set the key indexes that lookups can be issued for by name.

        Args:
            key_indexes: Mapping of key name -> key index
        """
        self.key_indexes = dict(key_indexes)

    @property
    def hop_limit(self) -> int:
        return self.hop_limit_factor * max(1, self.m) + self.ring_size

    # ==================== Construction ====================

    def build_overlay_network(self) -> Ring:
        """
        Hash every node onto the ring and link each to its successor.

        The highest identifier's successor is the lowest identifier. An
        empty topology produces an empty ring.

        Returns:
            The built ring
        """
        if self.network is None:
            raise NotInitializedError("network is not set")

        topology = self.network.get_topology()
        ring = Ring(self.ring_size)
        for name, node in topology.items():
            identifier = self.ch.hash(name) % self.ring_size
            node.set_id(identifier)
            ring.insert(identifier, node)

        entries = list(ring)
        for i, (identifier, node) in enumerate(entries):
            _, successor = entries[(i + 1) % len(entries)]
            node.add_neighbor(NodeType.SUCCESSOR, successor)
            # Predecessors follow from the same ordering
            successor.add_neighbor(NodeType.PREDECESSOR, node)

        self.ring = ring
        self.finger_tables = {}
        self._fingers_built = False

        self.logger.info(f"Built ring of {len(ring)} nodes in space of {self.ring_size}")
        self.logger.debug(f"Ring identifiers: {ring.identifiers()}")
        return ring

    def build_finger_table(self):
        """
        Build the m-entry routing table of every node on the ring.

        Tables are rebuilt from scratch on every call.
        """
        self._require_ring()

        finger_tables = {}
        for identifier, node in self.ring:
            table = FingerTable(identifier, self.m)
            node.set_routing_table(table.build(self.ring))
            finger_tables[identifier] = table
            self.logger.debug(repr(table))

        self.finger_tables = finger_tables
        self._fingers_built = True
        self.logger.info(f"Built finger tables for {len(finger_tables)} nodes")

    # ==================== Lookup ====================

    def look_up(self, key_index: int) -> LookUpResponse:
        """
        Route a lookup for a key index through the finger tables.

        Starts at the node with the smallest identifier. At each step the
        lookup stops if the current node holds the key or if the key falls
        between the current node and its successor (the successor then owns
        it). Otherwise it jumps to the farthest finger preceding the key, or
        to the successor if none does.

        Args:
            key_index: Identifier of the key

        Returns:
            LookUpResponse with visited peers and the owning node
        """
        if not self._fingers_built:
            raise NotInitializedError("finger tables are not built")
        self._require_ring()

        target = key_index % self.ring_size
        current = self.ring.first_entry()[1]
        visited: List[str] = []

        for _ in range(self.hop_limit):
            self._visit(visited, current)

            data = current.get_data()
            if data and target in data:
                return LookUpResponse.from_visited(visited, current.get_id(), current.get_name())

            successor = self._successor(current)
            if Interval.open_closed(current.get_id(), successor.get_id()).contains(target, self.ring_size):
                self._visit(visited, successor)
                return LookUpResponse.from_visited(visited, successor.get_id(), successor.get_name())

            next_hop = closest_preceding_finger(
                current.get_routing_table(), current.get_id(), target, self.ring_size)
            current = next_hop if next_hop is not None else successor

        self.logger.warning(
            f"Lookup for {target} hit hop limit {self.hop_limit}, "
            f"returning {current.get_name()}")
        return LookUpResponse.from_visited(
            visited, current.get_id(), current.get_name(), degraded=True)

    def look_up_key(self, key_name: str) -> LookUpResponse:
        """Look up a key by the name registered with set_keys."""
        if key_name not in self.key_indexes:
            raise KeyError(f"unknown key: {key_name}")
        return self.look_up(self.key_indexes[key_name])

    def find_responsible_node(self, identifier: int) -> NodeInterface:
        """The first node at or after identifier on the ring."""
        self._require_ring()
        return self.ring.find_successor(identifier)

    # ==================== Helpers ====================

    def _require_ring(self):
        if self.ring is None:
            raise NotInitializedError("overlay network is not built")
        if len(self.ring) == 0:
            raise NotInitializedError("ring has no nodes")

    def _successor(self, node: NodeInterface) -> NodeInterface:
        successor = node.get_neighbor(NodeType.SUCCESSOR)
        if successor is not None:
            return successor
        return self.ring.next_node(node.get_id())

    @staticmethod
    def _visit(visited: List[str], node: NodeInterface):
        name = node.get_name()
        if name not in visited:
            visited.append(name)

    def __repr__(self) -> str:
        size = len(self.ring) if self.ring is not None else 0
        return f"ChordProtocol(m={self.m}, nodes={size})"
