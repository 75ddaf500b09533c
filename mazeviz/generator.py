import random
from dataclasses import dataclass
from typing import Optional

from .cell import Cell


@dataclass(frozen=True)
class CarveStep:
    # order is the highest generation_order handed out so far
    current: Cell
    chosen: Optional[Cell]
    side: Optional[str]
    order: int

    @property
    def backtrack(self):
        return self.chosen is None


def first_present_cell(grid):
    return next(grid.present_cells(), None)


def iter_carve(grid, rng=None, start=None):
    """
    Randomized depth-first backtracking over the present cells of `grid`.

    Yields one CarveStep per wall removal and one per backtrack. Walls are
    only ever knocked down towards unvisited cells, so the passages end up
    forming a spanning tree.
    """
    rng = rng or random.Random()
    start = start or first_present_cell(grid)
    if start is None:
        return

    visited = {start}
    cells_added = 0
    start.generation_order = cells_added
    cells_added += 1
    stack = [start]

    while stack:
        current = stack[-1]
        unvisited_neighbors = grid.unvisited_neighbors(current, visited)
        if unvisited_neighbors:
            chosen, side = rng.choice(unvisited_neighbors)
            grid.remove_walls(current, side)
            visited.add(chosen)
            chosen.generation_order = cells_added
            cells_added += 1
            stack.append(chosen)
            yield CarveStep(current, chosen, side, chosen.generation_order)
        else:
            stack.pop()
            if stack:
                yield CarveStep(stack[-1], None, None, cells_added - 1)


def carve_passages(grid, rng=None, start=None):
    return list(iter_carve(grid, rng, start))
