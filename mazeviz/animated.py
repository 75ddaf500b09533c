import heapq
import time
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import FrozenSet, Optional

from .cell import Cell
from .errors import SolverDestroyedError
from .settings import ALGORITHMS, ANIMATION_DELAY_MS
from .solver import manhattan_distance


class SolverState(Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    FINISHED = 'finished'
    STOPPED = 'stopped'


@dataclass(frozen=True)
class Snapshot:
    visited: FrozenSet[Cell]
    path: FrozenSet[Cell]
    current: Optional[Cell]
    phase: str


@dataclass
class SolveStats:
    cells_explored: int = 0
    path_length: int = 0
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    @property
    def elapsed(self):
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    def summary(self):
        return (f"⏱️ Time: {self.elapsed:.2f}s | "
                f"🔍 Cells explored: {self.cells_explored} | "
                f"📏 Path length: {self.path_length}")


def _no_heuristic(_cell, _end):
    return 0


class SolveRun:
    """Frames of one solve() call; closing or dropping it stops that run."""

    def __init__(self, solver, run_id):
        self._solver = solver
        self._run_id = run_id
        self._frames = solver._run(run_id)

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._frames)

    def close(self):
        self._frames.close()
        self._solver._abandon(self._run_id)

    def __del__(self):
        self.close()


class AnimatedSolver:
    """
    Step-by-step shortest path search over a Maze.

    solve() hands back a lazy sequence of Snapshots: one per expanded cell,
    then one per cell of the path as it is traced back from the exit. The
    caller decides the pacing and may stop() between any two frames.
    """

    def __init__(self, maze, algorithm='dijkstra', delay_ms=ANIMATION_DELAY_MS):
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm {algorithm!r}; expected one of {ALGORITHMS}")
        self.maze = maze
        self.algorithm = algorithm
        self.delay_ms = delay_ms
        self.state = SolverState.IDLE
        self._destroyed = False
        self._run_id = 0
        self.reset()

    @property
    def destroyed(self):
        return self._destroyed

    @property
    def found(self):
        return self._found

    def _check_alive(self):
        if self._destroyed:
            raise SolverDestroyedError("solver has been destroyed; create a new one")

    def _active(self, run_id):
        return self.state is SolverState.RUNNING and self._run_id == run_id

    def reset(self):
        self._check_alive()
        self.stop()
        self._run_id += 1
        self.state = SolverState.IDLE
        self.visited = set()
        self.path = set()
        self.previous = {}
        grid = self.maze.grid
        self.distances = {cell: float('inf') for cell in grid.present_cells()} if grid is not None else {}
        self.stats = SolveStats()
        self._found = False

    def stop(self):
        self._check_alive()
        if self.state is SolverState.RUNNING:
            self.state = SolverState.STOPPED
            self.stats.end_time = time.perf_counter()

    def destroy(self):
        if self._destroyed:
            return
        self.stop()
        self._run_id += 1
        self._destroyed = True
        self.maze = None
        self.visited = None
        self.path = None
        self.previous = None
        self.distances = None

    def solve(self):
        self._check_alive()
        if self.state is SolverState.RUNNING:
            print("⚠️ Solver is already running; ignoring solve().")
            return iter(())

        self.reset()
        if self.maze.start_cell is None or self.maze.end_cell is None:
            self.state = SolverState.FINISHED
            return iter(())

        self.state = SolverState.RUNNING
        return SolveRun(self, self._run_id)

    def play(self, on_frame=None):
        """Consume solve() with delay_ms between frames; returns the last snapshot."""
        last = None
        for snapshot in self.solve():
            last = snapshot
            if on_frame is not None:
                on_frame(snapshot)
            if self.delay_ms and self.state is SolverState.RUNNING:
                time.sleep(self.delay_ms / 1000)
        return last

    def snapshot(self, current=None, phase='explore'):
        return Snapshot(frozenset(self.visited), frozenset(self.path), current, phase)

    def _run(self, run_id):
        if not self._active(run_id):
            return
        self.stats.start_time = time.perf_counter()
        grid = self.maze.grid
        start = self.maze.start_cell
        end = self.maze.end_cell
        heuristic = manhattan_distance if self.algorithm == 'astar' else _no_heuristic

        counter = count()
        closed = set()
        self.distances[start] = 0
        h = heuristic(start, end)
        open_heap = [(h, h, next(counter), start)]

        try:
            while self._active(run_id):
                current = None
                while open_heap:
                    _, _, _, candidate = heapq.heappop(open_heap)
                    if candidate not in closed:
                        current = candidate
                        break
                if current is None:
                    break
                if current is end:
                    self._found = True
                    break

                closed.add(current)
                self.visited.add(current)
                self.stats.cells_explored += 1

                g = self.distances[current]
                for neighbor in grid.connected_neighbors(current):
                    if neighbor in closed:
                        continue
                    new_g = g + 1
                    if new_g < self.distances.get(neighbor, float('inf')):
                        self.distances[neighbor] = new_g
                        self.previous[neighbor] = current
                        h = heuristic(neighbor, end)
                        heapq.heappush(open_heap, (new_g + h, h, next(counter), neighbor))

                yield self.snapshot(current, 'explore')

            if not self._active(run_id):
                return

            if not self._found:
                self._finish()
                print("❌ No solution found.")
                yield self.snapshot(None, 'no_solution')
                return

            cell = end
            while cell is not None:
                if not self._active(run_id):
                    return
                self.path.add(cell)
                self.stats.path_length = len(self.path)
                yield self.snapshot(cell, 'path')
                cell = None if cell is start else self.previous[cell]

            if self._active(run_id):
                self._finish()
                yield self.snapshot(None, 'done')
        finally:
            self._abandon(run_id)

    def _abandon(self, run_id):
        # a run whose frames are no longer consumed counts as stopped
        if self._active(run_id):
            self.state = SolverState.STOPPED
            self.stats.end_time = time.perf_counter()

    def _finish(self):
        self.state = SolverState.FINISHED
        self.stats.end_time = time.perf_counter()
