"""Shortest path search over a TileGrid and conversion to world-space waypoints."""

import logging
import math
from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

import networkx as nx

from .grid import Cell, TileGrid
from .vector import Vector2

logger = logging.getLogger(__name__)

WaypointPath = Tuple[Vector2, ...]


class PathConfigurationError(ValueError):
    """Raised when start or destination cannot be used for path search."""


class PathFinder:
    """
    Computes a cell route between two walkable cells.

    Implementations return the route including both endpoints, or an
    empty sequence when the destination is unreachable.
    """

    def compute_path(self, grid: TileGrid, start: Cell, destination: Cell,
                     diagonals: bool = False) -> Sequence[Cell]:
        raise NotImplementedError


class NetworkXPathFinder(PathFinder):
    """A* search on a networkx graph of the walkable cells."""

    def compute_path(self, grid: TileGrid, start: Cell, destination: Cell,
                     diagonals: bool = False) -> Sequence[Cell]:
        graph = build_graph(grid, diagonals)
        heuristic = _octile if diagonals else _manhattan
        try:
            return nx.astar_path(graph, start, destination,
                                 heuristic=heuristic, weight='weight')
        except nx.NetworkXNoPath:
            return []


class BreadthFirstPathFinder(PathFinder):
    """Unweighted breadth-first search; shortest in number of steps."""

    def compute_path(self, grid: TileGrid, start: Cell, destination: Cell,
                     diagonals: bool = False) -> Sequence[Cell]:
        parents: Dict[Cell, Optional[Cell]] = {start: None}
        queue = deque([start])

        while queue:
            cell = queue.popleft()
            if cell == destination:
                break
            for neighbor in grid.neighbors(*cell, include_diagonals=diagonals):
                if neighbor not in parents:
                    parents[neighbor] = cell
                    queue.append(neighbor)

        if destination not in parents:
            return []

        route: List[Cell] = []
        cell: Optional[Cell] = destination
        while cell is not None:
            route.append(cell)
            cell = parents[cell]
        route.reverse()
        return route


def _manhattan(a: Cell, b: Cell) -> float:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _octile(a: Cell, b: Cell) -> float:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return max(dx, dy) + (math.sqrt(2) - 1) * min(dx, dy)


def build_graph(grid: TileGrid, diagonals: bool = False) -> nx.Graph:
    """Graph with one node per walkable cell, edges weighted by step length."""
    graph = nx.Graph()
    for y in range(grid.height):
        for x in range(grid.width):
            if not grid.is_walkable(x, y):
                continue
            graph.add_node((x, y))
            for nx_, ny in grid.neighbors(x, y, include_diagonals=diagonals):
                weight = math.hypot(nx_ - x, ny - y)
                graph.add_edge((x, y), (nx_, ny), weight=weight)
    return graph


def _check_cell(grid: TileGrid, cell: Cell, role: str) -> None:
    x, y = cell
    if not grid.in_bounds(x, y):
        raise PathConfigurationError(
            f"{role} cell {cell} is outside the {grid.width}x{grid.height} grid"
        )
    if not grid.is_walkable(x, y):
        raise PathConfigurationError(
            f"{role} cell {cell} ('{grid.symbol_at(x, y)}') is not walkable"
        )


def cell_to_world(cell: Cell, tile_size: float) -> Vector2:
    """Scale a cell coordinate to the world position of its tile origin."""
    return Vector2(float(cell[0] * tile_size), float(cell[1] * tile_size))


def find_path(grid: TileGrid, start: Cell, destination: Cell,
              tile_size: float,
              finder: Optional[PathFinder] = None,
              diagonals: bool = False) -> WaypointPath:
    """
    Compute the waypoint path from `start` to `destination`.

    Raises PathConfigurationError when either cell is out of bounds or
    not walkable. An unreachable destination yields an empty path.
    """
    start = (int(start[0]), int(start[1]))
    destination = (int(destination[0]), int(destination[1]))
    _check_cell(grid, start, "Start")
    _check_cell(grid, destination, "Destination")

    # Region labels are 4-connected, diagonal moves may join regions
    if not diagonals and not grid.connected(start, destination):
        logger.info("No route from %s to %s: cells are in separate regions",
                    start, destination)
        return ()

    if finder is None:
        finder = NetworkXPathFinder()

    cells = finder.compute_path(grid, start, destination, diagonals)
    if not cells:
        logger.info("No route from %s to %s", start, destination)
        return ()

    logger.debug("Route %s -> %s: %d cells", start, destination, len(cells))
    return tuple(cell_to_world(cell, tile_size) for cell in cells)
