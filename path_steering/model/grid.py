"""Tile layout classification and immutable walkability grid."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class LayoutError(ValueError):
    """Raised when a tile layout cannot be turned into a grid."""


@dataclass(frozen=True)
class TileSpec:
    walkable: bool
    color: str = "#000000"


@dataclass(frozen=True)
class TileClassification:
    """
    Maps layout symbols to tile properties.

    Symbols missing from the table fall back to `default_walkable`
    and `default_color`.
    """
    symbols: Dict[str, TileSpec] = field(default_factory=dict)
    default_walkable: bool = True
    default_color: str = "#000000"

    def is_walkable(self, symbol: str) -> bool:
        spec = self.symbols.get(symbol)
        if spec is None:
            return self.default_walkable
        return spec.walkable

    def color_of(self, symbol: str) -> str:
        spec = self.symbols.get(symbol)
        if spec is None:
            return self.default_color
        return spec.color


def default_classification() -> TileClassification:
    """Classification of the platformer room: walls and air block movement."""
    return TileClassification(
        symbols={
            'x': TileSpec(walkable=False, color='#808080'),  # wall
            ' ': TileSpec(walkable=False, color='#000000'),  # no floor
            '|': TileSpec(walkable=True, color='#A52A2A'),   # ladder
            '-': TileSpec(walkable=True, color='#008000'),   # platform
        },
        default_walkable=True,
        default_color='#000000',
    )


@dataclass(frozen=True, eq=False)
class TileGrid:
    """
    Read-only snapshot of a classified room.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    """
    width: int
    height: int
    rows: Tuple[str, ...]
    walkable: np.ndarray   # bool mask, True = passable
    labels: np.ndarray     # 4-connected region id per cell, 0 = blocked

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        """Check if cell is within bounds and passable."""
        if not self.in_bounds(x, y):
            return False
        return bool(self.walkable[y, x])

    def symbol_at(self, x: int, y: int) -> str:
        return self.rows[y][x]

    def cells_by_symbol(self, symbol: str) -> List[Cell]:
        """Return all (x, y) cells holding `symbol`, in row-major order."""
        return [
            (x, y)
            for y, row in enumerate(self.rows)
            for x, tile in enumerate(row)
            if tile == symbol
        ]

    def neighbors(self, x: int, y: int,
                  include_diagonals: bool = False) -> List[Cell]:
        """Walkable von Neumann (or Moore) neighbours of a cell."""
        if include_diagonals:
            offsets = [
                (-1, -1), (0, -1), (1, -1),
                (-1, 0),           (1, 0),
                (-1, 1),  (0, 1),  (1, 1)
            ]
        else:
            offsets = [(0, -1), (-1, 0), (1, 0), (0, 1)]

        return [
            (x + dx, y + dy)
            for dx, dy in offsets
            if self.is_walkable(x + dx, y + dy)
        ]

    def regions(self) -> np.ndarray:
        """Region id of every cell; cells sharing an id are 4-connected."""
        return self.labels

    def connected(self, a: Cell, b: Cell) -> bool:
        """True when both cells are walkable and in the same 4-connected region."""
        if not (self.is_walkable(*a) and self.is_walkable(*b)):
            return False
        return bool(self.labels[a[1], a[0]] == self.labels[b[1], b[0]])


def build_grid(layout: Sequence[str],
               classification: Optional[TileClassification] = None) -> TileGrid:
    """
    Classify every layout character and freeze the result.

    Rows must all have the same length; an empty layout or ragged rows
    raise LayoutError.
    """
    if classification is None:
        classification = default_classification()

    rows = tuple(layout)
    if not rows:
        raise LayoutError("Layout has no rows")

    width = max(len(row) for row in rows)
    if width == 0:
        raise LayoutError("Layout rows are empty")
    for y, row in enumerate(rows):
        if len(row) != width:
            raise LayoutError(
                f"Layout row {y} has length {len(row)}, expected {width}"
            )

    height = len(rows)
    walkable = np.zeros((height, width), dtype=bool)
    for y, row in enumerate(rows):
        for x, tile in enumerate(row):
            walkable[y, x] = classification.is_walkable(tile)

    labels, region_count = ndimage.label(walkable)

    walkable.setflags(write=False)
    labels.setflags(write=False)

    logger.debug("Built %dx%d grid: %d walkable cells in %d regions",
                 width, height, int(walkable.sum()), region_count)

    return TileGrid(width=width, height=height, rows=rows,
                    walkable=walkable, labels=labels)
