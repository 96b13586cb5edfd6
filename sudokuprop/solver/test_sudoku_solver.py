from unittest import TestCase

import numpy as np

from sudokuprop import config
from sudokuprop.solver.observer import SolverObserver, LoggingObserver
from sudokuprop.solver.sudoku import Sudoku
from sudokuprop.solver.sudoku_solver import SudokuSolver, SolverState, solve_sudoku
from sudokuprop.sudoku_util import read_puzzles, parse_puzzle, format_puzzle, DimensionMismatchError

SOLUTION = '243186759851972346769453182375619824614827593928534671586291437497365218132748965'

# needs guessing, no cell can be deduced
HARD = '800000000003600000070090200050007000000045700000100030001000068008500010090000400'

# a single cell can be deduced before the solver gets stuck
PARTIAL = '100007090030020008009600500005300900010080002600004000300000010040000007007000300'
PARTIAL_STALLED = '100007090030020008009600500005300900010080002600004000300000010041000007007000300'


def empty_grid():
    return [[0] * 9 for _ in range(9)]


class RecordingObserver(SolverObserver):
    def __init__(self, grid=None):
        self.grid = grid
        self.commits = []
        self.pointing = []
        self.groups = []
        self.committed_per_cycle = []
        self.finished = None

    def on_cycle(self, cycle, stall_count):
        if self.grid is not None:
            self.committed_per_cycle.append(self.grid.committed_count())

    def on_group(self, kind, index):
        self.groups.append((kind, index))

    def on_commit(self, cell, rule):
        self.commits.append(((cell.row, cell.col), cell.value, rule))

    def on_pointing(self, number, kind, index, removed):
        self.pointing.append((number, kind, index, removed))

    def on_finish(self, result):
        self.finished = result


class Test(TestCase):

    def test_solve_reference_puzzle(self):
        result = solve_sudoku(config.REFERENCE_PUZZLE)

        self.assertEqual(SolverState.COMPLETE, result.state)
        self.assertTrue(result.solved)
        self.assertEqual(SOLUTION, format_puzzle(result.grid))
        self.assertTrue(result.grid.is_valid_solution())
        self.assertEqual(81 - 20, result.commits)

    def test_solve_sudokus(self):
        sudokus = read_puzzles(config.puzzles_path)

        for sudoku, solution in sudokus:
            result = solve_sudoku(sudoku)

            self.assertTrue(result.solved)
            self.assertEqual(solution.tolist(), result.values.tolist())

    def test_givens_are_kept(self):
        puzzle = np.array(config.REFERENCE_PUZZLE)
        result = solve_sudoku(puzzle)

        givens = puzzle != 0
        np.testing.assert_array_equal(givens, result.grid.givens_mask())
        np.testing.assert_array_equal(puzzle[givens], result.values[givens])

    def test_single_blank(self):
        grid = parse_puzzle(SOLUTION)
        grid[0][8] = 0
        sudoku = Sudoku(grid)
        observer = RecordingObserver()

        result = SudokuSolver(sudoku, observer=observer).solve()

        self.assertTrue(result.solved)
        self.assertEqual(1, result.cycles)
        self.assertEqual(1, result.commits)
        self.assertEqual(9, sudoku[0, 8].value)
        self.assertEqual([((0, 8), 9, 'unique')], observer.commits)
        self.assertIs(result, observer.finished)

    def test_unique_position(self):
        grid = empty_grid()
        grid[1][0] = 5
        grid[2][7] = 5
        grid[4][3] = 5
        grid[5][5] = 5
        sudoku = Sudoku(grid)
        observer = RecordingObserver()
        solver = SudokuSolver(sudoku, observer=observer)

        sudoku.filter_pass()
        self.assertEqual(9, len(sudoku[0, 4].candidates))

        solver.eval_set(sudoku.groups()[9])

        self.assertEqual(5, sudoku[0, 4].value)
        self.assertEqual([((0, 4), 5, 'unique')], observer.commits)
        self.assertNotIn(5, sudoku[3, 4].candidates)
        self.assertEqual(0, solver.stall_count)

    def test_naked_single(self):
        sudoku = Sudoku(empty_grid())
        sudoku[4, 4].candidates = {7}
        observer = RecordingObserver()
        solver = SudokuSolver(sudoku, observer=observer)

        solver.eval_set(sudoku.groups()[9 + 4])

        self.assertEqual([((4, 4), 7, 'single')], observer.commits)
        self.assertNotIn(7, sudoku[4, 3].candidates)
        self.assertNotIn(7, sudoku[0, 4].candidates)

    def _box_with_candidate(self, number, keep):
        sudoku = Sudoku(empty_grid())
        for coord in sudoku.box_coords(0, 0):
            if coord not in keep:
                sudoku[coord].eliminate(number)
        return sudoku

    def test_pointing_pair_row(self):
        sudoku = self._box_with_candidate(3, [(0, 0), (0, 1)])
        observer = RecordingObserver()

        SudokuSolver(sudoku, observer=observer).eval_set(sudoku.groups()[0])

        for j in range(3, 9):
            self.assertNotIn(3, sudoku[0, j].candidates)
        self.assertIn(3, sudoku[0, 0].candidates)
        self.assertIn(3, sudoku[0, 1].candidates)
        self.assertIn(3, sudoku[1, 5].candidates)
        self.assertIn(3, sudoku[3, 0].candidates)

        self.assertEqual([(3, 'row', 0, [(0, j) for j in range(3, 9)])], observer.pointing)
        self.assertEqual([], observer.commits)

    def test_pointing_pair_col(self):
        sudoku = self._box_with_candidate(3, [(0, 1), (2, 1)])
        observer = RecordingObserver()

        SudokuSolver(sudoku, observer=observer).eval_set(sudoku.groups()[0])

        for i in range(3, 9):
            self.assertNotIn(3, sudoku[i, 1].candidates)
        self.assertIn(3, sudoku[0, 1].candidates)
        self.assertIn(3, sudoku[2, 1].candidates)
        self.assertIn(3, sudoku[0, 5].candidates)

        self.assertEqual([(3, 'col', 1, [(i, 1) for i in range(3, 9)])], observer.pointing)

    def test_pointing_triple(self):
        sudoku = self._box_with_candidate(8, [(1, 0), (1, 1), (1, 2)])

        SudokuSolver(sudoku).eval_set(sudoku.groups()[0])

        for j in range(3, 9):
            self.assertNotIn(8, sudoku[1, j].candidates)
        self.assertIn(8, sudoku[0, 5].candidates)

    def test_pointing_needs_a_shared_line(self):
        sudoku = self._box_with_candidate(3, [(0, 0), (1, 1)])
        observer = RecordingObserver()

        SudokuSolver(sudoku, observer=observer).eval_set(sudoku.groups()[0])

        self.assertEqual([], observer.pointing)
        self.assertIn(3, sudoku[0, 5].candidates)
        self.assertIn(3, sudoku[5, 1].candidates)

    def test_pointing_only_in_boxes(self):
        sudoku = Sudoku(empty_grid())
        for j in range(2, 9):
            sudoku[0, j].eliminate(3)
        observer = RecordingObserver()

        SudokuSolver(sudoku, observer=observer).eval_set(sudoku.groups()[9])

        self.assertEqual([], observer.pointing)
        self.assertIn(3, sudoku[1, 0].candidates)

    def test_stall_on_single_given(self):
        grid = empty_grid()
        grid[4][4] = 5

        result = solve_sudoku(grid)

        self.assertEqual(SolverState.STALLED, result.state)
        self.assertFalse(result.solved)
        self.assertEqual(config.STALL_THRESHOLD + 1, result.cycles)
        self.assertEqual(config.STALL_THRESHOLD + 1, result.stall_count)
        self.assertEqual(0, result.commits)
        self.assertEqual(1, result.grid.committed_count())

    def test_stall_on_empty_grid(self):
        result = solve_sudoku(empty_grid())

        self.assertEqual(SolverState.STALLED, result.state)
        self.assertEqual(0, result.grid.committed_count())

    def test_stall_threshold(self):
        for threshold in [0, 2, 10]:
            result = solve_sudoku(empty_grid(), stall_threshold=threshold)
            self.assertEqual(threshold + 1, result.cycles)

        with self.assertRaises(ValueError):
            SudokuSolver(Sudoku(empty_grid()), stall_threshold=-1)

    def test_stall_on_hard_puzzle(self):
        result = solve_sudoku(parse_puzzle(HARD))

        self.assertEqual(SolverState.STALLED, result.state)
        self.assertEqual(0, result.commits)
        self.assertEqual(HARD, format_puzzle(result.grid))

    def test_stall_after_progress(self):
        result = solve_sudoku(parse_puzzle(PARTIAL))

        self.assertEqual(SolverState.STALLED, result.state)
        self.assertEqual(1, result.commits)
        self.assertEqual(PARTIAL_STALLED, format_puzzle(result.grid))

    def test_progress_is_monotonic(self):
        for puzzle in [config.REFERENCE_PUZZLE, parse_puzzle(PARTIAL)]:
            sudoku = Sudoku(puzzle)
            observer = RecordingObserver(sudoku)

            SudokuSolver(sudoku, observer=observer).solve()

            self.assertTrue(len(observer.committed_per_cycle) > 0)
            self.assertEqual(sorted(observer.committed_per_cycle), observer.committed_per_cycle)

    def test_termination_bound(self):
        puzzles = [board for board, _ in read_puzzles(config.puzzles_path)]
        puzzles += [parse_puzzle(HARD), parse_puzzle(PARTIAL), empty_grid()]

        for puzzle in puzzles:
            result = solve_sudoku(puzzle)
            self.assertLessEqual(result.commits, 81)
            self.assertLessEqual(result.cycles, (config.STALL_THRESHOLD + 1) * (result.commits + 1))

    def test_group_evaluation_order(self):
        grid = empty_grid()
        grid[0][0] = 1
        observer = RecordingObserver()

        solve_sudoku(grid, stall_threshold=0, observer=observer)

        expected = [('box', k) for k in range(9)] + [('row', k) for k in range(9)] + [('col', k) for k in range(9)]
        self.assertEqual(expected, observer.groups)

    def test_logging_observer(self):
        grid = parse_puzzle(SOLUTION)
        grid[0][8] = 0

        with self.assertLogs('sudokuprop.solver.observer', level='DEBUG') as logs:
            solve_sudoku(grid, observer=LoggingObserver())

        output = '\n'.join(logs.output)
        self.assertIn('Only one possible space for number 9: (0,8)', output)
        self.assertIn('Finished in state COMPLETE', output)

    def test_invalid_input(self):
        with self.assertRaises(DimensionMismatchError):
            solve_sudoku(empty_grid()[:8])
