import math
from collections import deque

import numpy as np

from .cell import Cell, OFFSETS, OPPOSITE, SIDES


class Grid:
    """rows x cols table of cells; a slot holding None is outside the maze shape."""

    def __init__(self, rows, cols, mask=None):
        self.rows = rows
        self.cols = cols
        if mask is not None:
            mask = np.asarray(mask, dtype=bool)
            if mask.shape != (rows, cols):
                raise ValueError(f"mask shape {mask.shape} does not match grid ({rows}, {cols})")
        self.cells = [
            [Cell(row, col) if mask is None or mask[row, col] else None for col in range(cols)]
            for row in range(rows)
        ]

    def in_bounds(self, row, col):
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row, col):
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def present_cells(self):
        for row in self.cells:
            for cell in row:
                if cell is not None:
                    yield cell

    def present_count(self):
        return sum(1 for _ in self.present_cells())

    def neighbor(self, cell, side):
        dr, dc = OFFSETS[side]
        return self.cell(cell.row + dr, cell.col + dc)

    def neighbors(self, cell, accept=None):
        """(neighbor, side) pairs in top, right, bottom, left order."""
        result = []
        for side in SIDES:
            other = self.neighbor(cell, side)
            if other is None:
                continue
            if accept is None or accept(cell, other, side):
                result.append((other, side))
        return result

    def unvisited_neighbors(self, cell, visited):
        return self.neighbors(cell, lambda _cell, other, _side: other not in visited)

    def connected_neighbors(self, cell):
        return [other for other, _ in self.neighbors(cell, lambda c, _other, side: not c.has_wall(side))]

    def remove_walls(self, cell, side):
        other = self.neighbor(cell, side)
        if other is None:
            raise ValueError(f"{cell!r} has no neighbour on its {side} side")
        cell.walls[side] = False
        other.walls[OPPOSITE[side]] = False
        return other

    def exterior_sides(self, cell):
        return [side for side in SIDES if self.neighbor(cell, side) is None]

    def open_exterior(self, cell, side):
        if self.neighbor(cell, side) is not None:
            raise ValueError(f"{side} side of {cell!r} is interior; use remove_walls")
        cell.walls[side] = False

    def close_exterior(self, cell, side):
        if self.neighbor(cell, side) is None:
            cell.walls[side] = True

    def boundary_cells(self):
        return [cell for cell in self.present_cells() if self.exterior_sides(cell)]

    def row_cells(self, row):
        return [cell for cell in self.cells[row] if cell is not None]

    def passage_count(self):
        # right/bottom only so each interior passage is counted once
        count = 0
        for cell in self.present_cells():
            for side in ('right', 'bottom'):
                if not cell.has_wall(side) and self.neighbor(cell, side) is not None:
                    count += 1
        return count

    def __repr__(self):
        return f"Grid({self.rows}x{self.cols}, present={self.present_count()})"


def radial_mask(rows, cols, rng=None):
    center_row = rows // 2
    center_col = cols // 2
    radius = min(rows, cols) / 3
    phase = rng.uniform(0, 2 * math.pi) if rng is not None else 0.0

    rr, cc = np.mgrid[0:rows, 0:cols]
    distance = np.hypot(rr - center_row, cc - center_col)
    angle = np.arctan2(rr - center_row, cc - center_col)
    mask = distance <= radius + np.sin(angle * 3 + phase) * radius / 4

    return _component_from(mask, center_row, center_col)


def _component_from(mask, row, col):
    rows, cols = mask.shape
    keep = np.zeros_like(mask)
    if rows == 0 or cols == 0 or not mask[row, col]:
        return keep

    queue = deque([(row, col)])
    keep[row, col] = True
    while queue:
        r, c = queue.popleft()
        for dr, dc in OFFSETS.values():
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and mask[nr, nc] and not keep[nr, nc]:
                keep[nr, nc] = True
                queue.append((nr, nc))
    return keep
