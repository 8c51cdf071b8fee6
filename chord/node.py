"""
Simulated peers placed on the Chord ring.
"""

from enum import Enum
from typing import Dict, List, Optional, Set, Iterable, Protocol


class NodeType(Enum):
    """Roles a neighbor can play for a node."""
    SUCCESSOR = "successor"
    PREDECESSOR = "predecessor"


class NodeInterface(Protocol):
    """Capabilities the routing engine needs from a peer."""

    def get_id(self) -> Optional[int]: ...

    def set_id(self, node_id: int) -> None: ...

    def get_name(self) -> str: ...

    def add_neighbor(self, role: NodeType, node: "NodeInterface") -> None: ...

    def get_neighbor(self, role: NodeType) -> Optional["NodeInterface"]: ...

    def set_routing_table(self, table: List["NodeInterface"]) -> None: ...

    def get_routing_table(self) -> Optional[List["NodeInterface"]]: ...

    def get_data(self) -> Optional[Set[int]]: ...


class Node:
    """
    A peer in the simulated network.

    Each node has:
    - A name, hashed to pick its place on the ring
    - An identifier, assigned once when the ring is built
    - Neighbors keyed by role (the successor is the one routing uses)
    - A routing table of m finger entries
    - The set of key identifiers it holds
    """

    def __init__(self, name: str, data: Optional[Iterable[int]] = None):
        self.name = name
        self.node_id: Optional[int] = None
        self.neighbors: Dict[NodeType, "Node"] = {}
        self.routing_table: Optional[List["Node"]] = None
        self.data: Set[int] = set(data) if data is not None else set()

    def get_id(self) -> Optional[int]:
        return self.node_id

    def set_id(self, node_id: int):
        """
        Assign the ring identifier.

        Identifiers are fixed for the run: assigning the same value again is
        a no-op, assigning a different one is an error.
        """
        if self.node_id is not None and self.node_id != node_id:
            raise ValueError(
                f"{self.name} already has identifier {self.node_id}, "
                f"cannot reassign to {node_id}")
        self.node_id = node_id

    def get_name(self) -> str:
        return self.name

    def add_neighbor(self, role: NodeType, node: "Node"):
        self.neighbors[role] = node

    def get_neighbor(self, role: NodeType) -> Optional["Node"]:
        return self.neighbors.get(role)

    def get_successor(self) -> Optional["Node"]:
        return self.neighbors.get(NodeType.SUCCESSOR)

    def set_routing_table(self, table: List["Node"]):
        # Replaced wholesale, never patched
        self.routing_table = list(table)

    def get_routing_table(self) -> Optional[List["Node"]]:
        return self.routing_table

    def get_data(self) -> Set[int]:
        return self.data

    def add_data(self, identifier: int):
        """Store a key identifier on this node."""
        self.data.add(identifier)

    def clear_data(self):
        self.data.clear()

    def __repr__(self) -> str:
        return f"Node({self.node_id}, {self.name})"
