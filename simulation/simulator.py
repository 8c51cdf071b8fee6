"""
Drives a Chord run: builds a network, places keys and issues lookups.
"""

import logging
from typing import Dict, Iterable, List, Optional

import config
from chord.protocol import ChordProtocol
from chord.response import LookUpResponse
from communication.network import Network


class Simulator:
    """
    A single static Chord ring with a fixed set of keys.

    Keys are stored on the node responsible for them before any lookup runs,
    so a lookup can be checked against where the key actually lives.
    """

    def __init__(self, m: int = config.M,
                 num_nodes: int = config.NUM_NODES,
                 num_keys: int = config.NUM_KEYS,
                 node_names: Optional[Iterable[str]] = None,
                 key_names: Optional[Iterable[str]] = None,
                 hash_function=None):
        """
        Args:
            m: Bit size of identifier space
            num_nodes: Number of peers (ignored when node_names is given)
            num_keys: Number of keys (ignored when key_names is given)
            node_names: Explicit peer names
            key_names: Explicit key names
            hash_function: Object with hash(name) -> int, shared by nodes and keys
        """
        self.m = m
        self.logger = logging.getLogger("Simulator")

        if node_names is not None:
            self.network = Network(node_names)
        else:
            if num_nodes < 1:
                raise ValueError(f"need at least one node, got {num_nodes}")
            self.network = Network.with_peers(num_nodes, config.NODE_NAME_PREFIX)

        if key_names is None:
            key_names = [f"{config.KEY_NAME_PREFIX}{i}" for i in range(num_keys)]
        self.key_names: List[str] = list(key_names)

        self.protocol = ChordProtocol(m, hash_function=hash_function,
                                      hop_limit_factor=config.HOP_LIMIT_FACTOR)
        self.key_indexes: Dict[str, int] = {}
        self.built = False

    def setup(self):
        """Build the ring and finger tables, then store every key on its owner."""
        self.protocol.set_network(self.network)
        self.protocol.build_overlay_network()
        self.protocol.build_finger_table()

        self.key_indexes = {
            name: self.protocol.ch.hash(name) % self.protocol.ring_size
            for name in self.key_names
        }
        self.protocol.set_keys(self.key_indexes)

        for node in self.network.get_topology().values():
            node.clear_data()
        for name, index in self.key_indexes.items():
            owner = self.protocol.find_responsible_node(index)
            owner.add_data(index)
            self.logger.debug(f"Stored {name} ({index}) on {owner.get_name()}")

        self.built = True
        self.logger.info(
            f"Simulation ready: {len(self.protocol.ring)} nodes, "
            f"{len(self.key_indexes)} keys, m={self.m}")
        return self

    def look_up(self, key_name: str) -> LookUpResponse:
        self._ensure_setup()
        return self.protocol.look_up_key(key_name)

    def run_lookups(self) -> Dict[str, LookUpResponse]:
        """
        Look up every key.

        Returns:
            Mapping of key name -> LookUpResponse
        """
        self._ensure_setup()
        return {name: self.protocol.look_up_key(name) for name in self.key_names}

    def verify(self) -> List[str]:
        """
        Check that every lookup resolved to the node holding the key.

        Returns:
            Names of keys whose lookup ended elsewhere (empty when correct)
        """
        self._ensure_setup()
        mismatched = []
        for name, response in self.run_lookups().items():
            expected = self.protocol.find_responsible_node(self.key_indexes[name])
            if response.node_index != expected.get_id() or response.degraded:
                self.logger.warning(
                    f"Lookup for {name} resolved to {response.node_name}, "
                    f"expected {expected.get_name()}")
                mismatched.append(name)
        return mismatched

    def describe_ring(self) -> List[str]:
        """One line per node: identifier, name, successor and held keys."""
        self._ensure_setup()
        lines = []
        for identifier, node in self.protocol.ring:
            successor = node.get_successor()
            keys = sorted(node.get_data())
            lines.append(
                f"{identifier:>6}  {node.get_name():<12} -> "
                f"{successor.get_id():>6}  keys={keys}")
        return lines

    def describe_fingers(self) -> List[str]:
        self._ensure_setup()
        return [repr(table) for table in self.protocol.finger_tables.values()]

    def _ensure_setup(self):
        if not self.built:
            self.setup()
