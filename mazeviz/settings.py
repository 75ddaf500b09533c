import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .errors import ConfigError

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    tomllib = None

FIG_WIDTH = 9
FIG_HEIGHT = 16
DPI = 200

CANVAS_WIDTH = 500
CANVAS_HEIGHT = 500
DEFAULT_CELL_SIZE = 25
MIN_GRID_SIZE = 10

MAX_SELECTION_ATTEMPTS = 5
ANIMATION_DELAY_MS = 50

BG_COLOR = '#0A0A15'
WALL_COLOR = '#FFFFFF'
CURRENT_COLOR = '#FF1493'
VISITED_COLOR = '#FFA500'
PATH_COLOR = '#00FF7F'
START_COLOR = '#4CAF50'
END_COLOR = '#F44336'
EMPTY_COLOR = '#1A1A2E'

GEN_DURATION = 5
SOLVE_DURATION = 10
TOTAL_DURATION = GEN_DURATION + SOLVE_DURATION
TARGET_FPS = 30
GEN_FRAMES = GEN_DURATION * TARGET_FPS
SOLVE_FRAMES = SOLVE_DURATION * TARGET_FPS
TOTAL_FRAMES = TOTAL_DURATION * TARGET_FPS
HOLD_FRAMES = 30

POLICIES = ('rows', 'boundary')
ALGORITHMS = ('dijkstra', 'astar')

INT_FIELDS = ('width', 'height', 'cell_size', 'min_size', 'max_attempts', 'delay_ms')


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class MazeConfig:
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    cell_size: int = DEFAULT_CELL_SIZE
    min_size: int = MIN_GRID_SIZE
    policy: str = 'rows'
    algorithm: str = 'dijkstra'
    max_attempts: int = MAX_SELECTION_ATTEMPTS
    delay_ms: int = ANIMATION_DELAY_MS
    radial: bool = False
    seed: int | None = None
    output_file: str = 'dfs_dijkstra_maze.mp4'

    def __post_init__(self):
        for name in INT_FIELDS:
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.radial, bool):
            raise ConfigError(f"radial must be true or false, got {self.radial!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if not isinstance(self.output_file, str):
            raise ConfigError(f"output_file must be a string, got {self.output_file!r}")
        if self.policy not in POLICIES:
            raise ConfigError(f"Unknown entrance policy: {self.policy!r} (expected one of {POLICIES})")
        if self.algorithm not in ALGORITHMS:
            raise ConfigError(f"Unknown solving algorithm: {self.algorithm!r} (expected one of {ALGORITHMS})")
        if self.max_attempts < 1:
            raise ConfigError("max_attempts must be at least 1")
        if self.delay_ms < 0:
            raise ConfigError("delay_ms cannot be negative")

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self):
        return asdict(self)


def load_config(path):
    """Load a MazeConfig from a JSON or TOML file."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    suffix = path.suffix.lower()
    if suffix in {'.toml', '.tml'} and tomllib is None:
        raise ConfigError("tomllib is unavailable; cannot parse TOML files")
    if suffix not in {'.json', '', '.toml', '.tml'}:
        raise ConfigError(f"Unsupported config file format: {suffix}")

    # JSONDecodeError, TOMLDecodeError and UnicodeDecodeError are all ValueErrors
    try:
        text = raw.decode('utf-8')
        data = tomllib.loads(text) if suffix in {'.toml', '.tml'} else json.loads(text)
    except ValueError as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a table/object at the top level")
    return MazeConfig.from_dict(data)
