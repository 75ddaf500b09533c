import random

import pytest

from mazeviz import Grid, bfs_distances, carve_passages, find_solution

from mazeutil import assert_valid_path, brute_force_hops, open_all


def test_open_three_by_three_has_five_cell_path():
    grid = open_all(Grid(3, 3))
    start, end = grid.cell(0, 0), grid.cell(2, 2)
    path = find_solution(grid, start, end)

    assert len(path) == 5
    assert_valid_path(grid, path, start, end)


@pytest.mark.parametrize("seed", range(5))
def test_solution_matches_brute_force(seed):
    rng = random.Random(seed)
    grid = Grid(8, 9)
    carve_passages(grid, rng)
    cells = list(grid.present_cells())
    start, end = rng.choice(cells), rng.choice(cells)

    path = find_solution(grid, start, end)
    assert_valid_path(grid, path, start, end)
    assert len(path) - 1 == brute_force_hops(grid, start, end)


def test_missing_endpoint_gives_empty_path():
    grid = Grid(2, 2)
    assert find_solution(grid, None, grid.cell(1, 1)) == []
    assert find_solution(grid, grid.cell(0, 0), None) == []


def test_unreachable_end_gives_empty_path():
    grid = Grid(2, 2)
    assert find_solution(grid, grid.cell(0, 0), grid.cell(1, 1)) == []


def test_start_equals_end():
    grid = Grid(2, 2)
    cell = grid.cell(1, 0)
    assert find_solution(grid, cell, cell) == [cell]


def test_bfs_distances_on_open_grid():
    grid = open_all(Grid(3, 3))
    distances = bfs_distances(grid, grid.cell(0, 0))
    assert distances[grid.cell(2, 2)] == 4
    assert len(distances) == 9
    assert bfs_distances(grid, None) == {}
