"""
Consistent hashing into the m-bit identifier space.
"""

import hashlib
from typing import Union


class ConsistentHashing:
    """
    Maps names to identifiers on a ring of size 2^m.

    The function is pure: the same name always lands on the same identifier
    for a given m, so ring construction is reproducible.
    """

    def __init__(self, m: int):
        """
        Args:
            m: Bit size of identifier space
        """
        if m < 1:
            raise ValueError(f"identifier width must be positive, got m={m}")
        self.m = m
        self.ring_size = 2 ** m

    def hash(self, name: Union[str, bytes]) -> int:
        """
        Hash a name to an identifier.

        Args:
            name: Node or key name

        Returns:
            Integer identifier in range [0, 2^m)
        """
        return hash_name(name, self.m)

    def __call__(self, name: Union[str, bytes]) -> int:
        return self.hash(name)

    def __repr__(self) -> str:
        return f"ConsistentHashing(m={self.m})"


def hash_name(name: Union[str, bytes], m: int = None) -> int:
    """
    Hash a name to an identifier with SHA-1.

    Args:
        name: Name to hash
        m: Bit size of identifier space (defaults to config.M)

    Returns:
        Integer identifier in range [0, 2^m)
    """
    if m is None:
        from config import M
        m = M

    if isinstance(name, str):
        name = name.encode("utf-8")

    digest = hashlib.sha1(name).digest()
    return int.from_bytes(digest, byteorder="big") % (2 ** m)
