"""
Simulated network topology: the set of peers taking part in a run.
"""

import logging
from typing import Dict, Iterable, Optional

from chord.node import Node


class Network:
    """
    Named peers of a simulation run.

    The topology keeps insertion order, so repeated get_topology() calls
    iterate peers in the same order.
    """

    def __init__(self, names: Optional[Iterable[str]] = None):
        """
        Args:
            names: Peer names to create nodes for
        """
        self.topology: Dict[str, Node] = {}
        self.logger = logging.getLogger("Network")

        for name in names or []:
            self.add_node(name)

    @classmethod
    def with_peers(cls, count: int, prefix: str = "Peer_") -> "Network":
        """
        Create a network of count peers named prefix0, prefix1, ...

        Args:
            count: Number of peers
            prefix: Name prefix
        """
        if count < 0:
            raise ValueError(f"peer count must not be negative, got {count}")
        return cls(f"{prefix}{i}" for i in range(count))

    def add_node(self, name: str, node: Optional[Node] = None) -> Node:
        """
        Add a peer to the topology.

        Args:
            name: Unique peer name
            node: Node handle to register (created if None)

        Returns:
            The registered node
        """
        if name in self.topology:
            raise ValueError(f"peer {name} already in network")
        if node is None:
            node = Node(name)
        self.topology[name] = node
        self.logger.debug(f"Added peer {name}")
        return node

    def get_topology(self) -> Dict[str, Node]:
        return dict(self.topology)

    def get_node(self, name: str) -> Optional[Node]:
        return self.topology.get(name)

    def __len__(self) -> int:
        return len(self.topology)

    def __contains__(self, name: str) -> bool:
        return name in self.topology

    def __repr__(self) -> str:
        return f"Network({len(self.topology)} peers)"
