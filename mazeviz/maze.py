import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .animated import AnimatedSolver
from .cell import Cell
from .entrance import Endpoints, select_entrance_exit
from .errors import InvalidDimensionsError, MazeDestroyedError
from .generator import carve_passages
from .grid import Grid, radial_mask
from .settings import MAX_SELECTION_ATTEMPTS, MIN_GRID_SIZE, MazeConfig


@dataclass(frozen=True)
class MazeSnapshot:
    grid: Grid
    start_pos: Optional[Tuple[int, int]]
    end_pos: Optional[Tuple[int, int]]
    path: Tuple[Cell, ...]
    start_side: Optional[str] = None
    end_side: Optional[str] = None


class Maze:
    def __init__(self, grid, endpoints=None, carve_steps=None):
        endpoints = endpoints or Endpoints()
        self.grid = grid
        self.start_cell = endpoints.start
        self.end_cell = endpoints.end
        self.start_side = endpoints.start_side
        self.end_side = endpoints.end_side
        self.solution = list(endpoints.solution)
        self.selection_attempts = endpoints.attempts
        self.used_fallback = endpoints.used_fallback
        self.carve_steps = list(carve_steps or [])
        self._destroyed = False

    @property
    def rows(self):
        return self.grid.rows if self.grid is not None else 0

    @property
    def cols(self):
        return self.grid.cols if self.grid is not None else 0

    @property
    def start_pos(self):
        return self.start_cell.pos if self.start_cell is not None else None

    @property
    def end_pos(self):
        return self.end_cell.pos if self.end_cell is not None else None

    @property
    def destroyed(self):
        return self._destroyed

    def snapshot(self):
        if self._destroyed:
            raise MazeDestroyedError("maze has been destroyed; generate a new one")
        return MazeSnapshot(
            grid=self.grid,
            start_pos=self.start_pos,
            end_pos=self.end_pos,
            path=tuple(self.solution),
            start_side=self.start_side,
            end_side=self.end_side,
        )

    def destroy(self):
        self.grid = None
        self.start_cell = None
        self.end_cell = None
        self.solution = []
        self.carve_steps = []
        self._destroyed = True

    def __repr__(self):
        if self._destroyed:
            return "Maze(destroyed)"
        return (f"Maze({self.rows}x{self.cols}, start={self.start_pos}, "
                f"end={self.end_pos}, solution={len(self.solution)})")


def build_maze(grid, rng=None, policy='rows', max_attempts=MAX_SELECTION_ATTEMPTS):
    rng = rng or random.Random()
    carve_steps = carve_passages(grid, rng)
    endpoints = select_entrance_exit(grid, rng, policy=policy, max_attempts=max_attempts)
    return Maze(grid, endpoints, carve_steps)


def generate(width, height, cell_size, *, rng=None, policy='rows',
             max_attempts=MAX_SELECTION_ATTEMPTS, radial=False, min_size=MIN_GRID_SIZE):
    """
    Carve a fresh maze sized to a width x height canvas.

    rows = height // cell_size and cols = width // cell_size, each clamped to
    at least `min_size`. Carving always starts from the first present cell in
    row-major order, (0, 0) on a full rectangle.
    """
    if cell_size <= 0:
        raise InvalidDimensionsError(f"cell_size must be positive, got {cell_size}")
    if width < 0 or height < 0:
        raise InvalidDimensionsError(f"canvas size must not be negative, got {width}x{height}")

    rng = rng or random.Random()
    rows = max(min_size, height // cell_size)
    cols = max(min_size, width // cell_size)
    mask = radial_mask(rows, cols, rng) if radial else None
    return build_maze(Grid(rows, cols, mask), rng, policy=policy, max_attempts=max_attempts)


class MazeSession:
    """Holds at most one live maze and the solver bound to it."""

    def __init__(self, config=None, rng=None):
        self.config = config or MazeConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.maze = None
        self.solver = None

    def rebuild(self, width=None, height=None, cell_size=None):
        self._teardown()
        config = self.config
        self.maze = generate(
            config.width if width is None else width,
            config.height if height is None else height,
            config.cell_size if cell_size is None else cell_size,
            rng=self.rng,
            policy=config.policy,
            max_attempts=config.max_attempts,
            radial=config.radial,
            min_size=config.min_size,
        )
        self.solver = AnimatedSolver(self.maze, algorithm=config.algorithm, delay_ms=config.delay_ms)
        return self.maze

    def snapshot(self):
        if self.maze is None:
            raise MazeDestroyedError("no live maze; call rebuild() first")
        return self.maze.snapshot()

    def _teardown(self):
        if self.solver is not None:
            self.solver.destroy()
            self.solver = None
        if self.maze is not None:
            self.maze.destroy()
            self.maze = None

    def destroy(self):
        self._teardown()
