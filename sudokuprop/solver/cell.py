from typing import Optional, Set

from sudokuprop import config


class Cell:
    """
    A single grid position. Either holds a committed value or the set of numbers that are still possible for it.
    """

    def __init__(self, row: int, col: int, given_value: int = 0):
        self.row = row
        self.col = col

        if given_value != 0:
            self.value: Optional[int] = given_value
            self.given = True
            self.candidates: Set[int] = set()
        else:
            self.value = None
            self.given = False
            self.candidates = set(range(1, config.GRID_SIZE + 1))

    @property
    def is_committed(self) -> bool:
        return self.value is not None

    @property
    def is_single(self) -> bool:
        return len(self.candidates) == 1

    @property
    def single_candidate(self) -> Optional[int]:
        if len(self.candidates) != 1:
            return None
        return next(iter(self.candidates))

    def eliminate(self, possibility: int) -> bool:
        """
        Removes a number from the candidates. Committed cells are left untouched. Returns True if the candidate set
        changed.
        """
        if self.is_committed or possibility not in self.candidates:
            return False

        self.candidates.discard(possibility)
        return True

    def commit(self, value: int) -> None:
        # no consistency check, the caller decides that the value is valid
        self.value = value
        self.candidates = set()

    def __repr__(self) -> str:
        if self.is_committed:
            return f'Cell({self.row}, {self.col}, value={self.value}, given={self.given})'
        return f'Cell({self.row}, {self.col}, candidates={sorted(self.candidates)})'
