"""Axis-aligned cubic regions used to partition space for the octree."""

from enum import IntEnum
from typing import Optional, Tuple
import numpy as np
from nbody_gravity.physics.vector import as_vec3


class OctantPartitionError(AssertionError):
    """A point inside an octant matched none of its children."""


class Child(IntEnum):
    """The 8 subdivisions of an octant: upper/lower, north/south, west/east."""

    UNW = 0
    UNE = 1
    USW = 2
    USE = 3
    DNW = 4
    DNE = 5
    DSW = 6
    DSE = 7

    @property
    def signs(self) -> Tuple[int, int, int]:
        """Direction of the child center along (x, y, z)."""
        name = self.name
        sx = 1 if name[2] == "E" else -1
        sy = 1 if name[1] == "N" else -1
        sz = 1 if name[0] == "U" else -1
        return sx, sy, sz


# Order in which children are tested during insertion
CHILD_ORDER = tuple(Child)


class Octant:
    """Cube ``[center - half_length, center + half_length)`` on each axis.

    Containment is closed on the lower face and open on the upper face, so
    a point on a shared boundary belongs to exactly one of two neighbours.
    Children take their bounds directly from the parent's bounds and
    center, which keeps sibling faces identical in floating point.
    """

    __slots__ = ("center", "half_length", "lower", "upper")

    def __init__(
        self,
        center,
        half_length: float,
        _bounds: Optional[Tuple[np.ndarray, np.ndarray]] = None,
    ):
        """Initialize octant.

        Args:
            center: Cube center (3 components)
            half_length: Half of the side length, must be positive
        """
        if not half_length > 0:
            raise ValueError(f"half_length must be positive, got {half_length}")
        self.center = as_vec3(center)
        self.half_length = float(half_length)
        if _bounds is None:
            self.lower = self.center - self.half_length
            self.upper = self.center + self.half_length
        else:
            self.lower, self.upper = _bounds
        self.center.flags.writeable = False
        self.lower.flags.writeable = False
        self.upper.flags.writeable = False

    @property
    def side_length(self) -> float:
        return 2.0 * self.half_length

    def contains(self, point) -> bool:
        """True iff the point lies in the cube (closed lower, open upper)."""
        lo = self.lower
        hi = self.upper
        return (
            lo[0] <= point[0] < hi[0]
            and lo[1] <= point[1] < hi[1]
            and lo[2] <= point[2] < hi[2]
        )

    def child(self, which: Child) -> "Octant":
        """Return the sub-cube in direction ``which``."""
        lower = self.lower.copy()
        upper = self.upper.copy()
        for axis, sign in enumerate(Child(which).signs):
            if sign > 0:
                lower[axis] = self.center[axis]
            else:
                upper[axis] = self.center[axis]
        quarter = self.half_length / 2.0
        center = self.center + quarter * np.array(Child(which).signs, dtype=np.float64)
        return Octant(center, quarter, _bounds=(lower, upper))

    def children(self) -> Tuple["Octant", ...]:
        """All 8 children in insertion test order."""
        return tuple(self.child(c) for c in CHILD_ORDER)

    def child_containing(self, point) -> Tuple[Child, "Octant"]:
        """Find the child octant holding ``point``.

        Returns:
            Tuple of (direction, child octant)

        Raises:
            OctantPartitionError: If no child contains the point
        """
        for which in CHILD_ORDER:
            octant = self.child(which)
            if octant.contains(point):
                return which, octant
        raise OctantPartitionError(
            f"Point {tuple(point)} matched no child of octant "
            f"center={tuple(self.center)} half_length={self.half_length}"
        )

    def __repr__(self) -> str:
        c = self.center
        return f"Octant(center=({c[0]:g}, {c[1]:g}, {c[2]:g}), half_length={self.half_length:g})"
