"""
Chord DHT routing package.
"""

from .errors import ChordError, NotInitializedError
from .hashing import ConsistentHashing, hash_name
from .interval import Boundary, Interval, in_range
from .node import Node, NodeInterface, NodeType
from .protocol import ChordProtocol
from .response import LookUpResponse
from .ring import Ring
from .routing import FingerTable

__all__ = [
    'ChordError', 'NotInitializedError',
    'ConsistentHashing', 'hash_name',
    'Boundary', 'Interval', 'in_range',
    'Node', 'NodeInterface', 'NodeType',
    'ChordProtocol', 'LookUpResponse', 'Ring', 'FingerTable',
]
