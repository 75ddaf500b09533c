"""
mazeviz - perfect maze generation, solving and animation.

- generate / build_maze: randomized depth-first carving plus entrance/exit selection
- find_solution: Dijkstra shortest path computed at generation time
- AnimatedSolver: Dijkstra or A* emitting one Snapshot per step
- MazeSession: owns the live maze and solver, rebuilds them in order
"""

from .animated import AnimatedSolver, Snapshot, SolveRun, SolverState, SolveStats
from .cell import Cell
from .entrance import Endpoints, select_entrance_exit
from .errors import (
    ConfigError,
    InvalidDimensionsError,
    MazeDestroyedError,
    MazeError,
    SolverDestroyedError,
)
from .generator import CarveStep, carve_passages, iter_carve
from .grid import Grid, radial_mask
from .maze import Maze, MazeSession, MazeSnapshot, build_maze, generate
from .settings import MazeConfig, load_config
from .solver import bfs_distances, find_solution

__all__ = [
    "AnimatedSolver",
    "CarveStep",
    "Cell",
    "ConfigError",
    "Endpoints",
    "Grid",
    "InvalidDimensionsError",
    "Maze",
    "MazeConfig",
    "MazeDestroyedError",
    "MazeError",
    "MazeSession",
    "MazeSnapshot",
    "Snapshot",
    "SolveRun",
    "SolveStats",
    "SolverDestroyedError",
    "SolverState",
    "bfs_distances",
    "build_maze",
    "carve_passages",
    "find_solution",
    "generate",
    "iter_carve",
    "load_config",
    "radial_mask",
    "select_entrance_exit",
]
