"""
Shared fixtures for the Chord tests.
"""

import pytest

from chord.protocol import ChordProtocol
from communication.network import Network


class FixedHash:
    """Hash function returning preassigned identifiers."""

    def __init__(self, identifiers):
        self.identifiers = dict(identifiers)

    def hash(self, name):
        return self.identifiers[name]


@pytest.fixture
def fixed_hash():
    """Factory for hash functions with preassigned identifiers."""
    return FixedHash


@pytest.fixture
def three_node_network():
    """Peers N1, N3 and N6, listed out of identifier order."""
    return Network(["N6", "N1", "N3"])


@pytest.fixture
def three_node_protocol(three_node_network):
    """m=3 ring with nodes at identifiers 1, 3 and 6, fingers built."""
    protocol = ChordProtocol(3, hash_function=FixedHash({"N1": 1, "N3": 3, "N6": 6}))
    protocol.set_network(three_node_network)
    protocol.build_overlay_network()
    protocol.build_finger_table()
    return protocol
