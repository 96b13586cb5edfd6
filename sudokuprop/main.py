import argparse
import logging
import sys
import time

from sudokuprop import config
from sudokuprop.render import render_grid, ConsoleObserver
from sudokuprop.solver.observer import LoggingObserver, MultiObserver
from sudokuprop.solver.sudoku import Sudoku
from sudokuprop.solver.sudoku_solver import SudokuSolver, SolveResult
from sudokuprop.sudoku_util import ValidationError, validate_puzzle, parse_puzzle, read_puzzles, format_puzzle


def solve_and_report(puzzle, args) -> SolveResult:
    start = time.time()

    grid = Sudoku(validate_puzzle(puzzle))
    grid.filter_pass()

    possible, message = grid.find_constraint_violations()
    if not possible:
        raise ValidationError(f'Sudoku constraint violation: {message}')

    observers = []
    if args.verbose:
        observers.append(LoggingObserver())
    if args.watch:
        observers.append(ConsoleObserver(grid, color=not args.no_color))

    solver = SudokuSolver(grid, stall_threshold=args.stall_threshold, observer=MultiObserver(*observers))
    result = solver.solve()

    print(render_grid(result.grid, color=not args.no_color))
    if result.solved:
        print('GAME COMPLETE!')
    else:
        print(f'BRAIN BUSTED after {result.cycles} cycles, {result.grid.committed_count()} cells filled')
    print(f'{time.time() - start:f} seconds')

    return result


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Solve Sudoku puzzles by constraint propagation.')
    parser.add_argument('--input', type=str, default=format_puzzle(config.REFERENCE_PUZZLE),
                        help='Sudoku string, 81 characters with 0 or . for blanks')
    parser.add_argument('--file', type=str, default=None,
                        help='File with one puzzle per line (puzzle;solution)')
    parser.add_argument('--stall-threshold', type=int, default=config.STALL_THRESHOLD,
                        help='Cycles without progress before giving up')
    parser.add_argument('--watch', action='store_true', help='Redraw the board after every commit')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log the deduction trace')
    args = parser.parse_args(argv)

    if args.stall_threshold < 0:
        parser.error('--stall-threshold must not be negative')

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if args.file is not None:
            puzzles = [board for board, _ in read_puzzles(args.file)]
        else:
            puzzles = [parse_puzzle(args.input)]

        results = [solve_and_report(puzzle, args) for puzzle in puzzles]
    except ValidationError as e:
        print(f'Invalid puzzle: {e}', file=sys.stderr)
        return 2
    except OSError as e:
        print(f'Cannot read puzzles: {e}', file=sys.stderr)
        return 2

    return 0 if all(result.solved for result in results) else 1


if __name__ == '__main__':
    sys.exit(main())
