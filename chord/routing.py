"""
Finger table construction and finger selection for Chord routing.
"""

from typing import List, Optional

from .interval import Interval
from .node import NodeInterface
from .ring import Ring


def finger_start(node_id: int, i: int, m: int) -> int:
    """
    Start of the i-th finger interval, (n + 2^(i-1)) mod 2^m.

    Args:
        node_id: Identifier of the node owning the table
        i: Finger number, 1..m
        m: Bit size of identifier space
    """
    if not 1 <= i <= m:
        raise ValueError(f"finger number must be in 1..{m}, got {i}")
    return (node_id + 2 ** (i - 1)) % (2 ** m)


class FingerTable:
    """
    Finger table for efficient routing in Chord.

    The i-th entry in the finger table of node n contains the first node
    that succeeds n by at least 2^(i-1) on the identifier circle.
    Fingers are numbered 1..m.
    """

    def __init__(self, node_id: int, m: int):
        """
        Initialize finger table for a node.

        Args:
            node_id: This node's identifier
            m: Bit size of identifier space
        """
        self.node_id = node_id
        self.m = m
        self.max_id = 2 ** m

        self.starts = [finger_start(node_id, i, m) for i in range(1, m + 1)]
        self.fingers: List[Optional[NodeInterface]] = [None] * m

    def build(self, ring: Ring) -> List[NodeInterface]:
        """
        Fill every entry from the ring, replacing any previous contents.

        Each finger is the ring entry with the smallest identifier >= its
        start, or the ring's first entry when the start lies past the last
        node.

        Args:
            ring: The fully built ring

        Returns:
            The m finger nodes, finger 1 first
        """
        first = ring.first_entry()
        fingers = []
        for start in self.starts:
            entry = ring.ceiling_entry(start)
            if entry is None:
                entry = first
            fingers.append(entry[1])
        self.fingers = fingers
        return list(fingers)

    def get_finger(self, i: int) -> Optional[NodeInterface]:
        """
        Get the node at finger i (1..m).

        Returns:
            Node or None if out of range or not built
        """
        if 1 <= i <= self.m:
            return self.fingers[i - 1]
        return None

    def get_start(self, i: int) -> int:
        """Start of finger i (1..m), or -1 if out of range."""
        if 1 <= i <= self.m:
            return self.starts[i - 1]
        return -1

    def find_closest_preceding_finger(self, identifier: int) -> Optional[NodeInterface]:
        """
        Find the farthest finger strictly between this node and identifier.

        Args:
            identifier: The identifier being routed to

        Returns:
            Finger node, or None if no finger precedes identifier
        """
        return closest_preceding_finger(self.fingers, self.node_id, identifier, self.max_id)

    def get_all_fingers(self) -> List[Optional[NodeInterface]]:
        return self.fingers.copy()

    def __len__(self) -> int:
        return self.m

    def __repr__(self) -> str:
        entries = []
        for i in range(1, self.m + 1):
            finger = self.get_finger(i)
            if finger is not None:
                entries.append(
                    f"  [{i}] start={self.get_start(i)} -> "
                    f"{finger.get_id()} ({finger.get_name()})")

        entries_str = "\n".join(entries) if entries else "  (empty)"
        return f"FingerTable for Node {self.node_id}:\n{entries_str}"


def closest_preceding_finger(fingers: Optional[List[Optional[NodeInterface]]],
                             node_id: int, identifier: int,
                             ring_size: int) -> Optional[NodeInterface]:
    """
    Pick the farthest finger lying in (node_id, identifier).

    Fingers are scanned from entry m down to entry 1, so the first match is
    the one making the most progress towards identifier.

    Args:
        fingers: Routing table of the current node, finger 1 first
        node_id: Identifier of the current node
        identifier: Target identifier
        ring_size: Number of positions on the ring

    Returns:
        Finger node, or None if the table is missing or no finger qualifies
    """
    if not fingers:
        return None

    preceding = Interval.open_open(node_id, identifier)
    for finger in reversed(fingers):
        if finger is None or finger.get_id() is None:
            continue
        if preceding.contains(finger.get_id(), ring_size):
            return finger
    return None
