"""Rectangles and neighborhood helpers on the XZ plane."""

from __future__ import annotations

from collections.abc import Iterator

from levelforge.types import GridCoord, XZCell

# 4-neighborhood on the XZ plane.
XZ_OFFSETS: tuple[XZCell, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Rect:
    """Axis-aligned rectangle of grid cells on the XZ plane.

    Covers the half-open ranges ``[x1, x2)`` and ``[z1, z2)``, so a Rect of
    width 3 at x=2 occupies columns 2, 3 and 4.
    """

    __slots__ = ("x1", "z1", "x2", "z2")

    def __init__(
        self, x: GridCoord, z: GridCoord, width: GridCoord, depth: GridCoord
    ) -> None:
        self.x1: GridCoord = x
        self.z1: GridCoord = z
        self.x2: GridCoord = x + width
        self.z2: GridCoord = z + depth

    @classmethod
    def from_bounds(
        cls, x1: GridCoord, z1: GridCoord, x2: GridCoord, z2: GridCoord
    ) -> Rect:
        """Create a Rect from corner coordinates (x1, z1, x2, z2)."""
        return cls(x1, z1, x2 - x1, z2 - z1)

    @property
    def width(self) -> GridCoord:
        return self.x2 - self.x1

    @property
    def depth(self) -> GridCoord:
        return self.z2 - self.z1

    @property
    def area(self) -> int:
        return self.width * self.depth

    def center(self) -> XZCell:
        """Integer center cell, rounded toward the origin corner."""
        return (self.x1 + self.width // 2, self.z1 + self.depth // 2)

    def intersects(self, other: Rect) -> bool:
        """True if the two rectangles share at least one cell.

        Rectangles that merely touch along an edge do not intersect.
        """
        return (
            self.x1 < other.x2
            and other.x1 < self.x2
            and self.z1 < other.z2
            and other.z1 < self.z2
        )

    def contains(self, cell: XZCell) -> bool:
        x, z = cell
        return self.x1 <= x < self.x2 and self.z1 <= z < self.z2

    def cells(self) -> Iterator[XZCell]:
        """Yield every cell of the rectangle in x-major order."""
        for x in range(self.x1, self.x2):
            for z in range(self.z1, self.z2):
                yield (x, z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x1, self.z1, self.x2, self.z2) == (
            other.x1,
            other.z1,
            other.x2,
            other.z2,
        )

    def __hash__(self) -> int:
        return hash((self.x1, self.z1, self.x2, self.z2))

    def __repr__(self) -> str:
        return f"Rect(x1={self.x1}, z1={self.z1}, x2={self.x2}, z2={self.z2})"


def connected_components(cells: set[XZCell]) -> list[set[XZCell]]:
    """Split a set of XZ cells into 4-connected components.

    Components are discovered in sorted cell order so the result is stable.
    """
    remaining = set(cells)
    components: list[set[XZCell]] = []
    for start in sorted(cells):
        if start not in remaining:
            continue
        remaining.discard(start)
        component = {start}
        stack = [start]
        while stack:
            cx, cz = stack.pop()
            for dx, dz in XZ_OFFSETS:
                neighbor = (cx + dx, cz + dz)
                if neighbor in remaining:
                    remaining.discard(neighbor)
                    component.add(neighbor)
                    stack.append(neighbor)
        components.append(component)
    return components
