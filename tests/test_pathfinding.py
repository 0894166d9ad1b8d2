"""Tests for path_steering.model.pathfinding."""

from __future__ import annotations

import pytest

from path_steering.config import DEFAULT_LAYOUT
from path_steering.model.grid import build_grid
from path_steering.model.pathfinding import (BreadthFirstPathFinder,
                                             NetworkXPathFinder,
                                             PathConfigurationError, PathFinder,
                                             build_graph, find_path)
from path_steering.model.vector import Vector2


class FixedRouteFinder(PathFinder):
    def __init__(self, route):
        self.route = route
        self.calls = 0

    def compute_path(self, grid, start, destination, diagonals=False):
        self.calls += 1
        return self.route


class TestFindPath:
    def test_corridor_waypoints_scaled_by_tile_size(self) -> None:
        grid = build_grid(["-----"])
        path = find_path(grid, (0, 0), (4, 0), tile_size=16)
        assert path == tuple(Vector2(16.0 * i, 0.0) for i in range(5))

    @pytest.mark.parametrize("finder", [NetworkXPathFinder(), BreadthFirstPathFinder()])
    def test_room_route(self, finder: PathFinder) -> None:
        grid = build_grid(DEFAULT_LAYOUT)
        path = find_path(grid, (1, 6), (5, 1), tile_size=16, finder=finder)
        assert len(path) == 16
        assert path[0] == Vector2(16, 96)
        assert path[-1] == Vector2(80, 16)
        for a, b in zip(path, path[1:]):
            assert a.distance_to(b) == pytest.approx(16)

    def test_finders_agree_on_unique_route(self) -> None:
        grid = build_grid(DEFAULT_LAYOUT)
        astar = find_path(grid, (1, 6), (5, 1), 16, finder=NetworkXPathFinder())
        bfs = find_path(grid, (1, 6), (5, 1), 16, finder=BreadthFirstPathFinder())
        assert astar == bfs

    def test_start_equals_destination(self) -> None:
        grid = build_grid(["---"])
        assert find_path(grid, (1, 0), (1, 0), tile_size=8) == (Vector2(8, 0),)

    @pytest.mark.parametrize("finder", [NetworkXPathFinder(), BreadthFirstPathFinder()])
    def test_unreachable_destination_gives_empty_path(self, finder: PathFinder) -> None:
        grid = build_grid(["-x-"])
        assert find_path(grid, (0, 0), (2, 0), 16, finder=finder) == ()

    def test_separate_regions_skip_search(self) -> None:
        grid = build_grid(["-x-"])
        finder = FixedRouteFinder([(0, 0), (2, 0)])
        assert find_path(grid, (0, 0), (2, 0), 16, finder=finder) == ()
        assert finder.calls == 0

    @pytest.mark.parametrize("finder", [NetworkXPathFinder(), BreadthFirstPathFinder()])
    def test_diagonal_moves(self, finder: PathFinder) -> None:
        grid = build_grid(["-x", "x-"])
        assert find_path(grid, (0, 0), (1, 1), 10, finder=finder) == ()
        path = find_path(grid, (0, 0), (1, 1), 10, finder=finder, diagonals=True)
        assert path == (Vector2(0, 0), Vector2(10, 10))

    def test_custom_finder_output_is_scaled(self) -> None:
        grid = build_grid(["---", "---"])
        finder = FixedRouteFinder([(0, 0), (0, 1), (1, 1)])
        path = find_path(grid, (0, 0), (1, 1), 4, finder=finder)
        assert path == (Vector2(0, 0), Vector2(0, 4), Vector2(4, 4))
        assert finder.calls == 1

    def test_empty_finder_result_gives_empty_path(self) -> None:
        grid = build_grid(["---"])
        assert find_path(grid, (0, 0), (2, 0), 4, finder=FixedRouteFinder([])) == ()


class TestPathConfigurationErrors:
    def test_non_walkable_start(self) -> None:
        grid = build_grid(DEFAULT_LAYOUT)
        with pytest.raises(PathConfigurationError, match="Start"):
            find_path(grid, (0, 0), (5, 1), 16)

    def test_non_walkable_destination(self) -> None:
        grid = build_grid(DEFAULT_LAYOUT)
        with pytest.raises(PathConfigurationError, match="Destination"):
            find_path(grid, (1, 6), (2, 2), 16)

    def test_out_of_bounds(self) -> None:
        grid = build_grid(["---"])
        with pytest.raises(ValueError, match="outside"):
            find_path(grid, (0, 0), (3, 0), 16)
        with pytest.raises(PathConfigurationError):
            find_path(grid, (0, -1), (1, 0), 16)

    def test_air_cell_is_not_walkable_by_default(self) -> None:
        grid = build_grid(["xxx", "x x", "xxx"])
        with pytest.raises(PathConfigurationError):
            find_path(grid, (1, 1), (1, 1), 16)


class TestBuildGraph:
    def test_nodes_are_walkable_cells(self) -> None:
        grid = build_grid(["-x", "--"])
        graph = build_graph(grid)
        assert set(graph.nodes) == {(0, 0), (0, 1), (1, 1)}
        assert graph.number_of_edges() == 2

    def test_diagonal_edges_weighted(self) -> None:
        grid = build_grid(["-x", "--"])
        graph = build_graph(grid, diagonals=True)
        assert graph[(0, 0)][(1, 1)]['weight'] == pytest.approx(2 ** 0.5)
