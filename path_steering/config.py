"""Configuration dataclasses and YAML loader for path steering simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml
from matplotlib.colors import is_color_like

from .model.grid import TileClassification, TileSpec, default_classification
from .model.steering import SteeringConfig

FINDERS = ('astar', 'bfs')

DEFAULT_LAYOUT = [
    "xxxxxxxx",
    "x   x-|x",
    "x   xx|x",
    "x     |x",
    "x|-|  |x",
    "x|x|  |x",
    "x|x|--|x",
    "xxxxxxxx",
]


@dataclass
class RoomConfig:
    layout: List[str] = field(default_factory=lambda: list(DEFAULT_LAYOUT))
    tile_size: int = 16


@dataclass
class RouteConfig:
    start: Tuple[int, int] = (1, 6)
    destination: Tuple[int, int] = (5, 1)
    diagonals: bool = False
    finder: str = 'astar'  # "astar" or "bfs"


@dataclass
class SimulationConfig:
    room: RoomConfig = field(default_factory=RoomConfig)
    tiles: TileClassification = field(default_factory=default_classification)
    route: RouteConfig = field(default_factory=RouteConfig)
    steering: SteeringConfig = field(default_factory=SteeringConfig)
    max_ticks: int = 500

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    frame_every: int = 1
    quiet: bool = False
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _section(raw: Dict, name: str) -> Dict:
    """Return a mapping section of the config; a missing or null section is empty."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a mapping, got {value!r}")
    return value


def _flag(raw: Dict, key: str, default: bool, name: str) -> bool:
    """Parse a boolean option; strings such as "no" are rejected."""
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


def _color(value: Any, name: str) -> str:
    if not isinstance(value, str) or not is_color_like(value):
        raise ValueError(f"{name} is not a valid colour: {value!r}")
    return value


def _parse_cell(raw: Any, name: str) -> Tuple[int, int]:
    """Parse an [x, y] pair."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{name} must be an [x, y] pair, got {raw!r}")
    return (int(raw[0]), int(raw[1]))


def _parse_tiles(tiles_raw: Dict) -> TileClassification:
    """Parse the symbol classification table from raw YAML data."""
    base = default_classification()
    symbols = dict(base.symbols)
    default_color = _color(tiles_raw.get('default_color', base.default_color),
                           'tiles.default_color')
    for symbol, spec in _section(tiles_raw, 'symbols').items():
        symbol = str(symbol)
        if len(symbol) != 1:
            raise ValueError(f"Tile symbol must be a single character: {symbol!r}")
        name = f"tiles.symbols[{symbol!r}]"
        if isinstance(spec, bool):
            spec = {'walkable': spec}
        if not isinstance(spec, dict):
            raise ValueError(f"{name} must be true, false or a mapping, got {spec!r}")
        previous = symbols.get(symbol)
        symbols[symbol] = TileSpec(
            walkable=_flag(spec, 'walkable', True, f"{name}.walkable"),
            color=_color(spec.get('color', previous.color if previous else default_color),
                         f"{name}.color")
        )
    return TileClassification(
        symbols=symbols,
        default_walkable=_flag(tiles_raw, 'default_walkable', base.default_walkable,
                               'tiles.default_walkable'),
        default_color=default_color
    )


def _parse_room(room_raw: Dict) -> RoomConfig:
    """Parse room layout from raw YAML data."""
    layout = room_raw.get('layout', DEFAULT_LAYOUT)
    if not isinstance(layout, list) or not all(isinstance(r, str) for r in layout):
        raise ValueError("room.layout must be a list of strings")
    tile_size = room_raw.get('tile_size', 16)
    if isinstance(tile_size, bool) or not isinstance(tile_size, int) or tile_size <= 0:
        raise ValueError(f"room.tile_size must be a positive integer, got {tile_size!r}")
    return RoomConfig(layout=list(layout), tile_size=tile_size)


def _parse_route(route_raw: Dict) -> RouteConfig:
    """Parse start/destination and search options from raw YAML data."""
    defaults = RouteConfig()
    finder = route_raw.get('finder', defaults.finder)
    if finder not in FINDERS:
        raise ValueError(f"Unknown path finder: {finder}")
    return RouteConfig(
        start=_parse_cell(route_raw.get('start', defaults.start), 'route.start'),
        destination=_parse_cell(route_raw.get('destination', defaults.destination),
                                'route.destination'),
        diagonals=_flag(route_raw, 'diagonals', defaults.diagonals, 'route.diagonals'),
        finder=finder
    )


def check_max_ticks(max_ticks: int) -> int:
    if max_ticks < 0:
        raise ValueError(f"max ticks must not be negative, got {max_ticks}")
    return max_ticks


def parse_config(raw: Optional[Dict]) -> SimulationConfig:
    """Build a SimulationConfig from a YAML-shaped dict."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration must be a mapping, got {raw!r}")

    steering_raw = _section(raw, 'steering')
    defaults = SteeringConfig()
    steering = SteeringConfig(
        max_speed=float(steering_raw.get('max_speed', defaults.max_speed)),
        max_acceleration=float(steering_raw.get('max_acceleration',
                                                defaults.max_acceleration)),
        arrival_radius=float(steering_raw.get('arrival_radius',
                                              defaults.arrival_radius))
    )

    sim_raw = _section(raw, 'simulation')
    max_ticks = check_max_ticks(int(sim_raw.get('max_ticks', 500)))

    # Parse export config (optional)
    export_raw = _section(raw, 'export')
    frame_every = int(export_raw.get('frame_every', 1))
    if frame_every < 1:
        raise ValueError(f"export.frame_every must be at least 1, got {frame_every}")

    return SimulationConfig(
        room=_parse_room(_section(raw, 'room')),
        tiles=_parse_tiles(_section(raw, 'tiles')),
        route=_parse_route(_section(raw, 'route')),
        steering=steering,
        max_ticks=max_ticks,
        csv_enabled=_flag(export_raw, 'csv', True, 'export.csv'),
        snapshot_enabled=_flag(export_raw, 'snapshot', True, 'export.snapshot'),
        gif_enabled=_flag(export_raw, 'gif', False, 'export.gif'),
        frame_every=frame_every
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw)
