import numpy as np
import pytest

from mazeviz import Grid, radial_mask

from mazeutil import is_connected, open_all


def test_neighbors_follow_top_right_bottom_left_order():
    grid = Grid(3, 3)
    center = grid.cell(1, 1)
    result = grid.neighbors(center)
    assert [side for _, side in result] == ['top', 'right', 'bottom', 'left']
    assert [other.pos for other, _ in result] == [(0, 1), (1, 2), (2, 1), (1, 0)]


def test_out_of_bounds_and_absent_neighbors_are_skipped():
    mask = np.ones((3, 3), dtype=bool)
    mask[0, 1] = False
    grid = Grid(3, 3, mask)

    corner = grid.cell(0, 0)
    assert [side for _, side in grid.neighbors(corner)] == ['bottom']
    assert grid.cell(0, 1) is None
    assert grid.cell(-1, 0) is None
    assert grid.cell(3, 3) is None


def test_unvisited_neighbors_filters_visited():
    grid = Grid(3, 3)
    center = grid.cell(1, 1)
    visited = {grid.cell(0, 1), grid.cell(1, 0)}
    assert [side for _, side in grid.unvisited_neighbors(center, visited)] == ['right', 'bottom']


def test_remove_walls_clears_both_sides():
    grid = Grid(2, 2)
    a = grid.cell(0, 0)
    b = grid.remove_walls(a, 'right')
    assert b is grid.cell(0, 1)
    assert not a.walls['right']
    assert not b.walls['left']
    assert grid.connected_neighbors(a) == [b]
    assert grid.connected_neighbors(b) == [a]


def test_remove_walls_towards_outside_is_rejected():
    grid = Grid(2, 2)
    with pytest.raises(ValueError):
        grid.remove_walls(grid.cell(0, 0), 'top')


def test_exterior_openings_are_one_sided():
    grid = Grid(2, 2)
    cell = grid.cell(0, 0)
    assert grid.exterior_sides(cell) == ['top', 'left']
    grid.open_exterior(cell, 'top')
    assert not cell.walls['top']
    # leads outside, so it is not a passage
    assert grid.connected_neighbors(cell) == []
    with pytest.raises(ValueError):
        grid.open_exterior(cell, 'right')

    grid.close_exterior(cell, 'top')
    assert cell.walls['top']


def test_passage_count_counts_each_pair_once():
    grid = open_all(Grid(3, 4))
    assert grid.passage_count() == 3 * 3 + 2 * 4


def test_boundary_cells_of_rectangle():
    grid = Grid(4, 5)
    boundary = {cell.pos for cell in grid.boundary_cells()}
    assert len(boundary) == 4 * 5 - 2 * 3
    assert (1, 1) not in boundary


def test_mask_shape_must_match():
    with pytest.raises(ValueError):
        Grid(3, 3, np.ones((2, 3), dtype=bool))


def test_radial_mask_is_single_component():
    mask = radial_mask(21, 21)
    assert mask[10, 10]
    assert not mask.all()
    assert mask.sum() > 1

    grid = open_all(Grid(21, 21, mask))
    assert is_connected(grid)


def test_radial_mask_with_random_phase():
    import random

    mask = radial_mask(15, 20, random.Random(3))
    assert mask.shape == (15, 20)
    assert mask[7, 10]
    assert is_connected(open_all(Grid(15, 20, mask)))


def test_mask_controls_presence():
    mask = np.zeros((2, 3), dtype=bool)
    mask[1, 2] = True
    grid = Grid(2, 3, mask)
    assert grid.present_count() == 1
    assert [cell.pos for cell in grid.present_cells()] == [(1, 2)]
    assert grid.cell(0, 0) is None
