"""Tests for path_steering.model.engine."""

from __future__ import annotations

import pytest

from path_steering.config import RoomConfig, RouteConfig, SimulationConfig
from path_steering.model.engine import SimulationEngine, make_finder
from path_steering.model.pathfinding import (BreadthFirstPathFinder,
                                             NetworkXPathFinder,
                                             PathConfigurationError)
from path_steering.model.vector import Vector2


def _config(**overrides) -> SimulationConfig:
    config = SimulationConfig()
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


class TestSimulationEngine:
    def test_creature_starts_on_start_cell(self) -> None:
        engine = SimulationEngine(SimulationConfig())
        assert engine.creature.position == Vector2(16, 96)
        assert len(engine.path) == 16
        assert not engine.is_finished()

    def test_runs_until_arrival(self) -> None:
        engine = SimulationEngine(SimulationConfig())
        states = []
        while not engine.is_finished():
            states.append(engine.step())

        summary = engine.get_summary()
        assert summary['arrived']
        assert summary['waypoints_reached'] == summary['waypoints_total'] == 16
        assert summary['total_steps'] == len(states) < 500
        assert summary['distance_to_destination'] < 20
        assert 0 < summary['peak_speed'] <= 2.0 + 1e-9
        assert states[-1].agent.state == 'arrived'
        assert all(s.agent.state == 'moving' for s in states[:-1])

        indices = [s.agent.waypoint_index for s in states]
        assert indices == sorted(indices)

    def test_distance_travelled_accumulates(self) -> None:
        engine = SimulationEngine(SimulationConfig())
        for _ in range(10):
            state = engine.step()
        assert state.metrics['distance_travelled'] == pytest.approx(
            engine.distance_travelled)
        assert engine.distance_travelled > 0

    def test_tick_limit(self) -> None:
        engine = SimulationEngine(_config(max_ticks=5))
        steps = 0
        while not engine.is_finished():
            engine.step()
            steps += 1
        assert steps == 5
        assert not engine.get_summary()['arrived']

    def test_unreachable_destination_finishes_immediately(self) -> None:
        config = _config(room=RoomConfig(layout=["-x-"]),
                         route=RouteConfig(start=(0, 0), destination=(2, 0)))
        engine = SimulationEngine(config)
        assert engine.path == ()
        assert engine.is_finished()

        state = engine.step()
        assert state.agent.x == 0 and state.agent.y == 0
        assert engine.get_summary()['waypoints_total'] == 0
        assert engine.distance_to_destination() == 0.0

    def test_wall_start_is_fatal(self) -> None:
        config = _config(route=RouteConfig(start=(0, 0), destination=(5, 1)))
        with pytest.raises(PathConfigurationError):
            SimulationEngine(config)

    def test_ragged_layout_is_fatal(self) -> None:
        config = _config(room=RoomConfig(layout=["---", "--"]),
                         route=RouteConfig(start=(0, 0), destination=(1, 0)))
        with pytest.raises(ValueError):
            SimulationEngine(config)

    def test_bfs_finder(self) -> None:
        config = _config(route=RouteConfig(finder='bfs'))
        engine = SimulationEngine(config)
        assert len(engine.path) == 16


class TestMakeFinder:
    def test_known_names(self) -> None:
        assert isinstance(make_finder('astar'), NetworkXPathFinder)
        assert isinstance(make_finder('bfs'), BreadthFirstPathFinder)

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            make_finder('dijkstra')
