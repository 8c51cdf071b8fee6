"""
Arcs on the circular identifier space.
"""

from dataclasses import dataclass
from enum import Enum


class Boundary(Enum):
    """Inclusivity of an arc's end points."""
    OPEN_CLOSED = "(]"
    OPEN_OPEN = "()"


@dataclass(frozen=True)
class Interval:
    """
    A contiguous arc between two identifiers, walking clockwise from start.

    The start is always excluded. The end is included for OPEN_CLOSED arcs
    and excluded for OPEN_OPEN arcs.
    """
    start: int
    end: int
    boundary: Boundary = Boundary.OPEN_CLOSED

    @classmethod
    def open_closed(cls, start: int, end: int) -> "Interval":
        return cls(start, end, Boundary.OPEN_CLOSED)

    @classmethod
    def open_open(cls, start: int, end: int) -> "Interval":
        return cls(start, end, Boundary.OPEN_OPEN)

    def contains(self, identifier: int, ring_size: int) -> bool:
        """
        Check whether an identifier lies on this arc.

        Args:
            identifier: The identifier to check
            ring_size: Number of positions on the ring (2^m)

        Returns:
            True if identifier is in the arc
        """
        return in_range(identifier, self.start, self.end, ring_size,
                        inclusive_end=self.boundary is Boundary.OPEN_CLOSED)

    def __str__(self) -> str:
        left, right = self.boundary.value
        return f"{left}{self.start}, {self.end}{right}"


def in_range(identifier: int, start: int, end: int, ring_size: int,
             inclusive_end: bool = True) -> bool:
    """
    Check if identifier is in the arc (start, end] or (start, end).

    When start == end, (start, end] covers the whole ring and (start, end)
    is empty.

    Args:
        identifier: The identifier to check
        start: Start of range (exclusive)
        end: End of range
        ring_size: Number of positions on the ring
        inclusive_end: Include end in range

    Returns:
        True if identifier is in range
    """
    if ring_size < 1:
        raise ValueError(f"ring size must be positive, got {ring_size}")

    identifier %= ring_size
    start %= ring_size
    end %= ring_size

    if start == end:
        return inclusive_end

    if start < end:
        if inclusive_end:
            return start < identifier <= end
        return start < identifier < end

    # Wraparound range
    if inclusive_end:
        return identifier > start or identifier <= end
    return identifier > start or identifier < end
