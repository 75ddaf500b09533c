SIDES = ('top', 'right', 'bottom', 'left')

OPPOSITE = {
    'top': 'bottom',
    'right': 'left',
    'bottom': 'top',
    'left': 'right',
}

OFFSETS = {
    'top': (-1, 0),
    'right': (0, 1),
    'bottom': (1, 0),
    'left': (0, -1),
}


class Cell:
    __slots__ = ('_row', '_col', 'walls', 'generation_order')

    def __init__(self, row, col):
        self._row = row
        self._col = col
        self.walls = {'top': True, 'right': True, 'bottom': True, 'left': True}
        self.generation_order = -1

    @property
    def row(self):
        return self._row

    @property
    def col(self):
        return self._col

    @property
    def pos(self):
        return (self._row, self._col)

    def has_wall(self, side):
        return self.walls[side]

    def __repr__(self):
        open_sides = ''.join(side[0].upper() for side in SIDES if not self.has_wall(side)) or '-'
        return f"Cell({self._row}, {self._col}, open={open_sides})"
