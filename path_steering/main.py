#!/usr/bin/env python3
"""
Path Steering Simulation

A creature follows a precomputed tile path through a room, steered with
bounded acceleration and speed.

Usage:
    python -m path_steering.main [--config configs/room.yaml] [options]

Examples:
    python -m path_steering.main
    python -m path_steering.main --config configs/room.yaml --gif --out-dir results/
    python -m path_steering.main --config configs/room.yaml --no-csv --no-snapshot --quiet
    python -m path_steering.main --config configs/room.yaml --steps 50 --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from path_steering.config import SimulationConfig, check_max_ticks, load_config
from path_steering.model.engine import SimulationEngine
from path_steering.export.csv_writer import CSVWriter
from path_steering.export.visualizer import Visualizer
from path_steering.export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: built-in room)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation ticks')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Log debug output to stderr')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(levelname)s %(name)s: %(message)s'
        )

    # Load configuration
    try:
        config = load_config(args.config) if args.config else SimulationConfig()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    try:
        if args.steps is not None:
            config.max_ticks = check_max_ticks(args.steps)
    except ValueError as e:
        print(f"Error: --steps: {e}", file=sys.stderr)
        return 1
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    config.out_dir = args.out_dir

    if not config.quiet:
        print("Initializing simulation...")
        print(f"  Room: {len(config.room.layout[0]) if config.room.layout else 0}"
              f"x{len(config.room.layout)} tiles of {config.room.tile_size} units")
        print(f"  Route: {config.route.start} -> {config.route.destination}")
        print(f"  Max ticks: {config.max_ticks}")

    # Initialize engine; bad layouts and unusable cells are fatal here
    try:
        engine = SimulationEngine(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"  Path: {len(engine.path)} waypoints")

    # Files actually written, keyed by report label
    outputs: Dict[str, Path] = {}

    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    visualizer = Visualizer(
        engine.grid, config.tiles, config.room.tile_size,
        engine.start, engine.destination, engine.path
    )

    config_label = str(args.config) if args.config else '(built-in room)'
    reporter = Reporter(config_label)

    if not config.quiet:
        print("\nRunning simulation...")

    final_state = None
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            if config.gif_enabled:
                if state.step % config.frame_every == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            reporter.update(state)

            if not config.quiet and state.step % 50 == 0:
                print(f"  Tick {state.step}: waypoint "
                      f"{state.agent.waypoint_index}/{len(engine.path)}, "
                      f"speed {state.agent.speed:.2f}")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    if final_state is None and not config.quiet:
        print("  No ticks run: the creature has no path to follow.")

    if csv_writer:
        csv_writer.close()
        outputs['CSV Log'] = csv_writer.output_path
        if not config.quiet:
            print(f"\nCSV saved: {csv_writer.output_path}")

    if config.snapshot_enabled and final_state:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        outputs['Snapshot'] = snapshot_path
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled and visualizer.frames:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        outputs['Animation'] = gif_path
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    if not config.quiet:
        print(reporter.generate_summary(final_state, engine.get_summary(), outputs))

    return 0


if __name__ == '__main__':
    sys.exit(main())
