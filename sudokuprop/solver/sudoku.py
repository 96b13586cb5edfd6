from typing import List, Tuple, Optional, Iterable, Iterator, NamedTuple

import numpy as np

from sudokuprop import config
from sudokuprop.solver.cell import Cell

Coord = Tuple[int, int]


class Group(NamedTuple):
    kind: str  # 'box', 'row' or 'col'
    index: int
    coords: List[Coord]


class Sudoku:
    def __init__(self, grid):
        size = config.GRID_SIZE
        box_size = config.BOX_SIZE

        self.size = size
        self.box_size = box_size

        self.cells = [[Cell(i, j, int(grid[i][j])) for j in range(size)] for i in range(size)]

    def __getitem__(self, coord: Coord) -> Cell:
        i, j = coord
        return self.cells[i][j]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __repr__(self) -> str:
        out = ''
        for row in self.to_array().tolist():
            out += str(row) + '\n'
        return out

    def box_bands(self, r: int, c: int) -> Tuple[range, range]:
        """
        Row and column index bands of the box containing the given coordinates.
        """
        ci = (r // self.box_size) * self.box_size
        cj = (c // self.box_size) * self.box_size
        return range(ci, ci + self.box_size), range(cj, cj + self.box_size)

    def box_coords(self, r: int, c: int) -> List[Coord]:
        rows, cols = self.box_bands(r, c)
        return [(i, j) for i in rows for j in cols]

    def row_coords(self, r: int) -> List[Coord]:
        return [(r, j) for j in range(self.size)]

    def col_coords(self, c: int) -> List[Coord]:
        return [(i, c) for i in range(self.size)]

    def groups(self) -> List[Group]:
        """
        All 27 groups in evaluation order: boxes (column band outer, row band inner), then rows, then columns.
        """
        boxes = [(i0, j0)
                 for j0 in range(0, self.size, self.box_size)
                 for i0 in range(0, self.size, self.box_size)]

        groups = [Group('box', k, self.box_coords(i0, j0)) for k, (i0, j0) in enumerate(boxes)]
        groups += [Group('row', i, self.row_coords(i)) for i in range(self.size)]
        groups += [Group('col', j, self.col_coords(j)) for j in range(self.size)]
        return groups

    def _erase(self, number: int, indices: Iterable[Coord]) -> List[Coord]:
        """
        Deletes the number from all candidate sets for the given indices. Returns the modified positions.
        """
        deleted = []
        for i, j in indices:
            if self.cells[i][j].eliminate(number):
                deleted.append((i, j))
        return deleted

    def eliminate_from_row(self, number: int, row: int, except_cols: Iterable[int] = ()) -> List[Coord]:
        skip = set(except_cols)
        return self._erase(number, [(i, j) for i, j in self.row_coords(row) if j not in skip])

    def eliminate_from_col(self, number: int, col: int, except_rows: Iterable[int] = ()) -> List[Coord]:
        skip = set(except_rows)
        return self._erase(number, [(i, j) for i, j in self.col_coords(col) if i not in skip])

    def eliminate_from_box(self, number: int, r: int, c: int) -> List[Coord]:
        return self._erase(number, self.box_coords(r, c))

    def filter_pass(self) -> int:
        """
        Removes the value of every committed cell from the candidates of its row, column and box.

        :return: The number of candidates removed
        """
        removed = 0
        for x in range(self.size):
            for y in range(self.size):
                value = self.cells[x][y].value
                if value is None:
                    continue

                removed += len(self.eliminate_from_row(value, x))
                removed += len(self.eliminate_from_col(value, y))
                removed += len(self.eliminate_from_box(value, x, y))
        return removed

    def is_complete(self) -> bool:
        return all(cell.is_committed for cell in self)

    def committed_count(self) -> int:
        return sum(1 for cell in self if cell.is_committed)

    def to_array(self) -> np.ndarray:
        values = [[cell.value or 0 for cell in row] for row in self.cells]
        return np.array(values, dtype=np.int32)

    def givens_mask(self) -> np.ndarray:
        return np.array([[cell.given for cell in row] for row in self.cells], dtype=bool)

    def _describe(self, group: Group) -> str:
        if group.kind == 'box':
            i, j = group.coords[0]
            return f'box {i, j}'
        return f'{group.kind} {group.index}'

    def find_constraint_violations(self) -> Tuple[bool, Optional[str]]:
        """
        Check for constraint violations on the board. Constraints checked for each row, column and box:
        - No duplicate numbers
        - All numbers are either set or can be set according to the candidates

        Candidates only reflect the givens after a filter pass.
        """
        numbers = set(range(1, self.size + 1))

        for group in self.groups():
            cells = [self[coord] for coord in group.coords]
            values = [cell.value for cell in cells if cell.is_committed]

            if len(values) != len(set(values)):
                return False, f'Duplicate values in {self._describe(group)}'

            available = set(values).union(*(cell.candidates for cell in cells))
            missing = numbers - available
            if missing:
                return False, f'Cannot place {min(missing):d} in {self._describe(group)}'

        return True, None

    def is_valid_solution(self) -> bool:
        if not self.is_complete():
            return False

        expected = list(range(1, self.size + 1))
        for group in self.groups():
            if sorted(self[coord].value for coord in group.coords) != expected:
                return False
        return True
