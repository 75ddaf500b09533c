import random

import numpy as np

from mazeviz import Grid, bfs_distances, carve_passages, select_entrance_exit

from mazeutil import assert_valid_path


def exterior_openings(grid):
    return [
        (cell.pos, side)
        for cell in grid.present_cells()
        for side in grid.exterior_sides(cell)
        if not cell.walls[side]
    ]


def carved(rows, cols, seed, mask=None):
    rng = random.Random(seed)
    grid = Grid(rows, cols, mask)
    carve_passages(grid, rng)
    return grid, rng


def test_rows_policy_opens_top_and_bottom():
    grid, rng = carved(10, 12, 1)
    endpoints = select_entrance_exit(grid, rng, policy='rows')

    start, end = endpoints.start, endpoints.end
    assert start.row == 0 and endpoints.start_side == 'top'
    assert end.row == 9 and endpoints.end_side == 'bottom'
    assert not start.walls['top']
    assert not end.walls['bottom']
    assert sorted(exterior_openings(grid)) == sorted([(start.pos, 'top'), (end.pos, 'bottom')])

    assert endpoints.attempts == 1
    assert not endpoints.used_fallback
    assert_valid_path(grid, endpoints.solution, start, end)


def test_rows_policy_maximises_column_distance():
    for seed in range(5):
        grid, rng = carved(10, 10, seed)
        endpoints = select_entrance_exit(grid, rng, policy='rows')
        best = max(abs(c.col - endpoints.start.col) for c in grid.row_cells(9))
        assert abs(endpoints.end.col - endpoints.start.col) == best


def test_boundary_policy_picks_farthest_boundary_cell():
    grid, rng = carved(10, 10, 7)
    endpoints = select_entrance_exit(grid, rng, policy='boundary')
    start, end = endpoints.start, endpoints.end

    boundary = grid.boundary_cells()
    assert start in boundary and end in boundary
    assert endpoints.start_side in grid.exterior_sides(start)
    assert endpoints.end_side in grid.exterior_sides(end)
    assert not start.walls[endpoints.start_side]
    assert not end.walls[endpoints.end_side]

    distances = bfs_distances(grid, start)
    assert distances[end] == max(distances[c] for c in boundary if c is not start)
    assert_valid_path(grid, endpoints.solution, start, end)


def test_boundary_policy_on_radial_shape():
    from mazeviz import radial_mask

    rng = random.Random(4)
    grid, rng = carved(18, 18, 4, radial_mask(18, 18, rng))
    endpoints = select_entrance_exit(grid, rng, policy='boundary')
    assert endpoints.solution
    assert endpoints.start_side in grid.exterior_sides(endpoints.start)


def test_uncarved_grid_falls_back_to_forced_corridor(capsys):
    grid = Grid(4, 4)
    endpoints = select_entrance_exit(grid, random.Random(0), policy='rows', max_attempts=3)

    assert endpoints.used_fallback
    assert endpoints.attempts == 3
    assert endpoints.start.pos == (0, 0)
    assert endpoints.end.pos == (3, 3)
    assert_valid_path(grid, endpoints.solution, endpoints.start, endpoints.end)
    # failed attempts leave no stray openings behind
    assert sorted(exterior_openings(grid)) == [((0, 0), 'top'), ((3, 3), 'bottom')]
    assert "forcing a corridor" in capsys.readouterr().out


def test_fallback_on_disconnected_cells_never_fails():
    mask = np.zeros((3, 3), dtype=bool)
    mask[0, 0] = True
    mask[2, 2] = True
    grid = Grid(3, 3, mask)

    endpoints = select_entrance_exit(grid, random.Random(0), policy='rows')
    assert endpoints.used_fallback
    assert endpoints.solution == [endpoints.start]


def test_empty_grid_has_no_endpoints():
    grid = Grid(3, 3, np.zeros((3, 3), dtype=bool))
    endpoints = select_entrance_exit(grid, random.Random(0))
    assert endpoints.start is None and endpoints.end is None
    assert endpoints.start_pos is None and endpoints.end_pos is None
    assert endpoints.solution == []


def test_single_cell_grid_is_its_own_entrance_and_exit():
    grid = Grid(1, 1)
    endpoints = select_entrance_exit(grid, random.Random(0), policy='rows')
    cell = grid.cell(0, 0)
    assert endpoints.start is cell and endpoints.end is cell
    assert endpoints.solution == [cell]
    assert not cell.walls['top'] and not cell.walls['bottom']
