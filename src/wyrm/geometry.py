"""Grid geometry for the playfield."""

from __future__ import annotations

from dataclasses import dataclass

Cell = tuple[int, int]


def grid_dimensions(
    pixel_width: int, pixel_height: int, cell_size: int,
) -> tuple[int, int]:
    """Return the number of whole cells that fit on a pixel surface."""
    return pixel_width // cell_size, pixel_height // cell_size


@dataclass(frozen=True)
class GridGeometry:
    """Playfield dimensions in cells, plus the pixel size of one cell.

    Coordinates use (x, y) ordering with the origin at the top-left cell.
    """

    width: int
    height: int
    cell_size: int = 20

    @classmethod
    def from_surface(
        cls, pixel_width: int, pixel_height: int, cell_size: int = 20,
    ) -> GridGeometry:
        """Derive the grid that fits a drawing surface."""
        width, height = grid_dimensions(pixel_width, pixel_height, cell_size)
        return cls(width=width, height=height, cell_size=cell_size)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def pixel_size(self) -> tuple[int, int]:
        """Pixel extent covered by whole cells."""
        return self.width * self.cell_size, self.height * self.cell_size

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies within the grid."""
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_origin(self, cell: Cell) -> tuple[int, int]:
        """Return the top-left pixel of a cell."""
        x, y = cell
        return x * self.cell_size, y * self.cell_size
