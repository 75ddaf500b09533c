from collections import deque

from mazeviz import Endpoints, Grid, Maze, find_solution


def open_all(grid):
    for cell in grid.present_cells():
        for side in ('right', 'bottom'):
            if grid.neighbor(cell, side) is not None:
                grid.remove_walls(cell, side)
    return grid


def maze_from(grid, start_pos, end_pos):
    start = grid.cell(*start_pos)
    end = grid.cell(*end_pos)
    return Maze(grid, Endpoints(start, end, solution=find_solution(grid, start, end)))


def brute_force_hops(grid, start, end):
    """Plain BFS over open passages; None when unreachable."""
    seen = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current is end:
            return seen[current]
        for neighbor in grid.connected_neighbors(current):
            if neighbor not in seen:
                seen[neighbor] = seen[current] + 1
                queue.append(neighbor)
    return None


def is_connected(grid):
    cells = list(grid.present_cells())
    if not cells:
        return True
    seen = {cells[0]}
    queue = deque([cells[0]])
    while queue:
        current = queue.popleft()
        for neighbor in grid.connected_neighbors(current):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return len(seen) == len(cells)


def assert_walls_symmetric(grid):
    for cell in grid.present_cells():
        for other, side in grid.neighbors(cell):
            opposite = {'top': 'bottom', 'right': 'left', 'bottom': 'top', 'left': 'right'}[side]
            assert cell.walls[side] == other.walls[opposite], (cell, other, side)


def assert_valid_path(grid, path, start, end):
    assert path[0] is start
    assert path[-1] is end
    for a, b in zip(path, path[1:]):
        assert b in grid.connected_neighbors(a)
