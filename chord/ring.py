"""
Identifier-ordered ring of nodes.
"""

import bisect
import logging
from typing import Iterator, List, Optional, Tuple

from .node import NodeInterface


RingEntry = Tuple[int, NodeInterface]


class Ring:
    """
    Nodes kept in strictly increasing identifier order.

    Supports the ordered-map queries the builders need: first entry,
    ceiling (first identifier >= x) and higher (first identifier > x),
    each wrapping to the first entry when nothing follows.
    """

    def __init__(self, ring_size: int):
        self.ring_size = ring_size
        self._ids: List[int] = []
        self._nodes: List[NodeInterface] = []
        self.logger = logging.getLogger("Ring")

    def insert(self, identifier: int, node: NodeInterface):
        """
        Place a node at an identifier.

        A second node hashing to an occupied identifier replaces the first.

        Args:
            identifier: Position on the ring
            node: Node handle to store there
        """
        idx = bisect.bisect_left(self._ids, identifier)
        if idx < len(self._ids) and self._ids[idx] == identifier:
            previous = self._nodes[idx]
            self.logger.warning(
                f"Identifier collision at {identifier}: "
                f"{node.get_name()} replaces {previous.get_name()}")
            self._nodes[idx] = node
            return
        self._ids.insert(idx, identifier)
        self._nodes.insert(idx, node)

    def first_entry(self) -> Optional[RingEntry]:
        if not self._ids:
            return None
        return self._ids[0], self._nodes[0]

    def ceiling_entry(self, identifier: int) -> Optional[RingEntry]:
        """Entry with the smallest identifier >= identifier, or None."""
        idx = bisect.bisect_left(self._ids, identifier)
        if idx == len(self._ids):
            return None
        return self._ids[idx], self._nodes[idx]

    def higher_entry(self, identifier: int) -> Optional[RingEntry]:
        """Entry with the smallest identifier > identifier, or None."""
        idx = bisect.bisect_right(self._ids, identifier)
        if idx == len(self._ids):
            return None
        return self._ids[idx], self._nodes[idx]

    def find_successor(self, identifier: int) -> Optional[NodeInterface]:
        """
        Find the node responsible for an identifier.

        Args:
            identifier: The identifier to look up

        Returns:
            First node at or after identifier, wrapping to the first node
        """
        entry = self.ceiling_entry(identifier % self.ring_size)
        if entry is None:
            entry = self.first_entry()
        return entry[1] if entry else None

    def next_node(self, identifier: int) -> Optional[NodeInterface]:
        """First node strictly after identifier, wrapping to the first node."""
        entry = self.higher_entry(identifier)
        if entry is None:
            entry = self.first_entry()
        return entry[1] if entry else None

    def identifiers(self) -> List[int]:
        return list(self._ids)

    def nodes(self) -> List[NodeInterface]:
        return list(self._nodes)

    def get(self, identifier: int) -> Optional[NodeInterface]:
        idx = bisect.bisect_left(self._ids, identifier)
        if idx < len(self._ids) and self._ids[idx] == identifier:
            return self._nodes[idx]
        return None

    def __contains__(self, identifier: int) -> bool:
        return self.get(identifier) is not None

    def __iter__(self) -> Iterator[RingEntry]:
        return iter(list(zip(self._ids, self._nodes)))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"Ring(size={self.ring_size}, ids={self._ids})"
