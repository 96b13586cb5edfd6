from typing import List, Optional, Tuple

import numpy as np

from sudokuprop import config


class ValidationError(Exception):
    pass


class DimensionMismatchError(ValidationError):
    pass


class ValueOutOfRangeError(ValidationError):
    pass


def validate_puzzle(puzzle) -> np.ndarray:
    """
    Checks that the puzzle is a 9x9 structure of integers in 0..9 and returns it as an array. Sudoku constraints
    (duplicate givens) are not checked here.
    """
    size = config.GRID_SIZE

    try:
        rows = [list(row) for row in puzzle]
    except TypeError:
        raise DimensionMismatchError('Puzzle must be a sequence of rows.')

    if len(rows) != size or any(len(row) != size for row in rows):
        shape = [len(row) for row in rows]
        raise DimensionMismatchError(f'Expected {size} rows of {size} values, got rows of length {shape}.')

    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
                raise ValueOutOfRangeError(f'Value at ({i},{j}) is not an integer: {value!r}')
            if not 0 <= value <= size:
                raise ValueOutOfRangeError(f'Value at ({i},{j}) out of range 0..{size}: {value}')

    return np.array(rows, dtype=np.int32)


def parse_puzzle(text: str) -> np.ndarray:
    """
    Parses a puzzle in line format: 81 characters, row-major, with '0' or '.' for blanks. Whitespace is ignored.
    """
    size = config.GRID_SIZE
    chars = [ch for ch in text if not ch.isspace()]

    if len(chars) != size * size:
        raise DimensionMismatchError(f'Expected {size * size} cells, got {len(chars)}.')

    nums = []
    for ch in chars:
        if ch == '.':
            nums.append(0)
        elif ch in '0123456789':
            nums.append(int(ch))
        else:
            raise ValueOutOfRangeError(f'Invalid cell character: {ch!r}')

    return np.array(nums, dtype=np.int32).reshape(size, size)


def format_puzzle(grid) -> str:
    values = grid.to_array() if hasattr(grid, 'to_array') else np.asarray(grid)
    return ''.join(str(v) for v in values.flatten())


def read_puzzles(path: str) -> List[Tuple[np.ndarray, Optional[np.ndarray]]]:
    """
    Reads one puzzle per line, optionally followed by ';' and the solution. Empty lines and '#' comments are skipped.
    """
    puzzles = []
    with open(path, 'r', encoding='utf8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            fields = line.split(';')
            board = parse_puzzle(fields[0])
            solution = parse_puzzle(fields[1]) if len(fields) > 1 and fields[1].strip() else None
            puzzles.append((board, solution))
    return puzzles
