"""
Result of a Chord lookup.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple


DELIMITER = "----------"


@dataclass(frozen=True)
class LookUpResponse:
    """
    The peers whose tables were consulted and the node owning the key.

    Attributes:
        peers_looked_up: Names of visited peers in visiting order, no repeats
        node_index: Identifier of the resolved node
        node_name: Name of the resolved node
        degraded: True when the lookup stopped at the hop limit
    """
    peers_looked_up: Tuple[str, ...]
    node_index: int
    node_name: str
    degraded: bool = False

    @classmethod
    def from_visited(cls, visited: Iterable[str], node_index: int, node_name: str,
                     degraded: bool = False) -> "LookUpResponse":
        # dict keeps insertion order and drops repeats
        peers = tuple(dict.fromkeys(visited))
        return cls(peers, node_index, node_name, degraded)

    @property
    def visited_peers(self) -> List[str]:
        return list(self.peers_looked_up)

    @property
    def hop_count(self) -> int:
        return len(self.peers_looked_up)

    def __str__(self) -> str:
        peers = "".join(f"{peer} " for peer in self.peers_looked_up)
        return (
            f"{DELIMITER}LOOKUP RESPONSE{DELIMITER}\n"
            f"peers : {peers}"
            f" hop count : {self.hop_count}"
            f" node index : {self.node_index}"
            f" node name : {self.node_name}"
            f"\n{DELIMITER}END LOOKUP RESPONSE\n"
        )
