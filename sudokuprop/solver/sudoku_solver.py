from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from sudokuprop import config
from sudokuprop.solver.cell import Cell
from sudokuprop.solver.observer import SolverObserver
from sudokuprop.solver.sudoku import Sudoku, Group
from sudokuprop.sudoku_util import validate_puzzle


class SolverState(Enum):
    SOLVING = 'solving'
    COMPLETE = 'complete'
    STALLED = 'stalled'


@dataclass
class SolveResult:
    state: SolverState
    grid: Sudoku
    cycles: int
    commits: int
    stall_count: int

    @property
    def solved(self) -> bool:
        return self.state == SolverState.COMPLETE

    @property
    def values(self) -> np.ndarray:
        return self.grid.to_array()


class SudokuSolver:
    """
    Pure constraint propagation, no guessing. Each cycle runs a filter pass and then evaluates all 27 groups. The
    solver stops once every cell is committed or after more than `stall_threshold` cycles in a row without a commit.
    """

    def __init__(self, grid: Sudoku, stall_threshold: int = config.STALL_THRESHOLD,
                 observer: Optional[SolverObserver] = None):
        if stall_threshold < 0:
            raise ValueError(f'stall_threshold must not be negative, got {stall_threshold}')

        self.grid = grid
        self.stall_threshold = stall_threshold
        self.observer = observer if observer is not None else SolverObserver()

        self.state = SolverState.SOLVING
        self.stall_count = 0
        self.cycles = 0
        self.commits = 0

    def solve(self) -> SolveResult:
        while self.state == SolverState.SOLVING:
            if self.grid.is_complete():
                self.state = SolverState.COMPLETE
            elif self.stall_count > self.stall_threshold:
                self.state = SolverState.STALLED
            else:
                self.step()

        result = SolveResult(self.state, self.grid, self.cycles, self.commits, self.stall_count)
        self.observer.on_finish(result)
        return result

    def step(self) -> None:
        """
        Runs a single propagation cycle. Commits made during the cycle reset the stall counter.
        """
        self.stall_count += 1
        self.cycles += 1
        self.observer.on_cycle(self.cycles, self.stall_count)

        self.grid.filter_pass()

        for group in self.grid.groups():
            self.observer.on_group(group.kind, group.index)
            self.eval_set(group)

    def commit(self, cell: Cell, value: int, rule: str) -> None:
        self.stall_count = 0
        self.commits += 1

        cell.commit(value)

        # New commitments invalidate candidate sets everywhere, filter again right away
        self.grid.filter_pass()
        self.observer.on_commit(cell, rule)

    def eval_set(self, group: Group) -> None:
        """
        Applies the deduction rules to one row, column or box:
        - a number that fits into a single cell of the group is placed there
        - in a box, a number whose 2 or 3 remaining cells share a row or column is removed from the rest of that line
        - cells left with a single candidate are committed
        """
        cells = [self.grid[coord] for coord in group.coords]

        for number in range(1, self.grid.size + 1):
            spaces = [cell for cell in cells if number in cell.candidates]

            if len(spaces) == 1:
                self.commit(spaces[0], number, 'unique')

            if group.kind == 'box' and 1 < len(spaces) <= self.grid.box_size:
                self._pointing(number, spaces)

        for cell in cells:
            if cell.is_single:
                self.commit(cell, cell.single_candidate, 'single')

    def _pointing(self, number: int, spaces: List[Cell]) -> None:
        box_rows, box_cols = self.grid.box_bands(spaces[0].row, spaces[0].col)

        if len({cell.row for cell in spaces}) == 1:
            row = spaces[0].row
            removed = self.grid.eliminate_from_row(number, row, except_cols=box_cols)
            self.observer.on_pointing(number, 'row', row, removed)
        elif len({cell.col for cell in spaces}) == 1:
            col = spaces[0].col
            removed = self.grid.eliminate_from_col(number, col, except_rows=box_rows)
            self.observer.on_pointing(number, 'col', col, removed)


def solve_sudoku(puzzle, stall_threshold: int = config.STALL_THRESHOLD,
                 observer: Optional[SolverObserver] = None) -> SolveResult:
    grid = Sudoku(validate_puzzle(puzzle))
    return SudokuSolver(grid, stall_threshold=stall_threshold, observer=observer).solve()
