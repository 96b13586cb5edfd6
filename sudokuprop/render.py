import sys
from typing import TextIO

from sudokuprop.solver.cell import Cell
from sudokuprop.solver.observer import SolverObserver
from sudokuprop.solver.sudoku import Sudoku

BOLD = '\033[1m'
NORMAL = '\033[22m'
GREEN = '\033[32m'
RESET = '\033[0m'

CLEAR_SCREEN = '\033[H\033[2J'

BAND_SEPARATOR = '----------+-----------+-----------'


def render_cell(cell: Cell, color: bool = True) -> str:
    text = f' {cell.value if cell.is_committed else " "} '
    if not color:
        return text

    # givens in bold, deduced values in green
    if cell.given:
        return BOLD + text + NORMAL
    return GREEN + text + RESET


def render_grid(grid: Sudoku, color: bool = True) -> str:
    lines = []
    for x in range(grid.size):
        line = ''
        for y in range(grid.size):
            line += render_cell(grid[x, y], color)
            if y % grid.box_size == grid.box_size - 1 and y != grid.size - 1:
                line += ' | '
        lines.append(line)

        if x % grid.box_size == grid.box_size - 1 and x != grid.size - 1:
            lines.append(BAND_SEPARATOR)
    return '\n'.join(lines) + '\n'


class ConsoleObserver(SolverObserver):
    """
    Redraws the board after every commit.
    """

    def __init__(self, grid: Sudoku, stream: TextIO = None, color: bool = True, clear: bool = True):
        self.grid = grid
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self.clear = clear

    def on_commit(self, cell: Cell, rule: str) -> None:
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        self.stream.write(render_grid(self.grid, self.color))
        self.stream.flush()
