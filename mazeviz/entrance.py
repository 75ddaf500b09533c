import random
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional

from .cell import Cell
from .settings import MAX_SELECTION_ATTEMPTS
from .solver import bfs_distances, find_solution


@dataclass
class Endpoints:
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    start_side: Optional[str] = None
    end_side: Optional[str] = None
    solution: List[Cell] = field(default_factory=list)
    attempts: int = 0
    used_fallback: bool = False

    @property
    def start_pos(self):
        return self.start.pos if self.start is not None else None

    @property
    def end_pos(self):
        return self.end.pos if self.end is not None else None


def _pick_side(grid, cell, preferred):
    sides = grid.exterior_sides(cell)
    if preferred in sides:
        return preferred
    return sides[0] if sides else None


def _occupied_rows(grid):
    return [row for row in range(grid.rows) if grid.row_cells(row)]


def choose_rows(grid, rng):
    """Random entrance on the first row, exit on the last row as far across as possible."""
    rows = _occupied_rows(grid)
    if not rows:
        return None
    top_cells = grid.row_cells(rows[0])
    bottom_cells = grid.row_cells(rows[-1])

    start = rng.choice(top_cells)
    best = max(abs(cell.col - start.col) for cell in bottom_cells)
    end = rng.choice([cell for cell in bottom_cells if abs(cell.col - start.col) == best])
    return start, _pick_side(grid, start, 'top'), end, _pick_side(grid, end, 'bottom')


def choose_boundary(grid, rng):
    """Random entrance on the outer boundary, exit at the boundary cell farthest from it."""
    edge_cells = grid.boundary_cells()
    if not edge_cells:
        return None

    start = rng.choice(edge_cells)
    start_side = grid.exterior_sides(start)[0]

    distances = bfs_distances(grid, start)
    reachable = [cell for cell in edge_cells if cell is not start and cell in distances]
    if reachable:
        end = max(reachable, key=lambda cell: distances[cell])
    else:
        others = [cell for cell in edge_cells if cell is not start]
        end = rng.choice(others) if others else start

    end_sides = grid.exterior_sides(end)
    if end is start and len(end_sides) > 1:
        end_side = end_sides[1]
    else:
        end_side = end_sides[0]
    return start, start_side, end, end_side


POLICIES = {
    'rows': choose_rows,
    'boundary': choose_boundary,
}


def _open(grid, cell, side, opened):
    if side is not None and cell.has_wall(side):
        grid.open_exterior(cell, side)
        opened.append((cell, side))


def _force_corridor(grid, start, end):
    """Knock down walls along a path of present cells, ignoring the carved passages."""
    came_from = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current is end:
            break
        for neighbor, side in grid.neighbors(current):
            if neighbor not in came_from:
                came_from[neighbor] = (current, side)
                queue.append(neighbor)

    if end not in came_from:
        # end is cut off from start; settle for the farthest cell start can reach
        end = list(came_from)[-1]

    current = end
    while came_from[current] is not None:
        previous, side = came_from[current]
        grid.remove_walls(previous, side)
        current = previous
    return end


def _fallback(grid, policy):
    rows = _occupied_rows(grid)
    start = grid.row_cells(rows[0])[0]
    end = grid.row_cells(rows[-1])[-1]
    end = _force_corridor(grid, start, end)

    start_side = _pick_side(grid, start, 'top')
    end_side = _pick_side(grid, end, 'bottom')
    if end is start and policy == 'boundary':
        sides = grid.exterior_sides(start)
        end_side = sides[1] if len(sides) > 1 else start_side
    opened = []
    _open(grid, start, start_side, opened)
    _open(grid, end, end_side, opened)
    return start, start_side, end, end_side


def select_entrance_exit(grid, rng=None, policy='rows', max_attempts=MAX_SELECTION_ATTEMPTS):
    """
    Pick and open an entrance and an exit, then make sure they are connected.

    Each attempt opens the two exterior walls and runs the static solver; an
    attempt that finds no path is undone before the next one. When the budget
    runs out a straight corridor is forced between the first and last rows,
    which always succeeds. A grid with no cells gives empty Endpoints.
    """
    rng = rng or random.Random()
    choose = POLICIES[policy]

    if grid.present_count() == 0:
        return Endpoints()

    for attempt in range(1, max_attempts + 1):
        picked = choose(grid, rng)
        if picked is None:
            return Endpoints(attempts=attempt)
        start, start_side, end, end_side = picked

        opened = []
        _open(grid, start, start_side, opened)
        _open(grid, end, end_side, opened)

        solution = find_solution(grid, start, end)
        if solution:
            return Endpoints(start, end, start_side, end_side, solution, attempt)

        for cell, side in opened:
            grid.close_exterior(cell, side)

    print(f"⚠️ No connecting path after {max_attempts} attempts; forcing a corridor.")
    start, start_side, end, end_side = _fallback(grid, policy)
    solution = find_solution(grid, start, end)
    return Endpoints(start, end, start_side, end_side, solution, max_attempts, used_fallback=True)
