import logging
from typing import List, Tuple

from sudokuprop.solver.cell import Cell

log = logging.getLogger(__name__)

Coord = Tuple[int, int]


class SolverObserver:
    """
    Receives the deduction trace of a solver run. All hooks are no-ops, subclasses override what they need.
    """

    def on_cycle(self, cycle: int, stall_count: int) -> None:
        pass

    def on_group(self, kind: str, index: int) -> None:
        pass

    def on_commit(self, cell: Cell, rule: str) -> None:
        pass

    def on_pointing(self, number: int, kind: str, index: int, removed: List[Coord]) -> None:
        pass

    def on_finish(self, result) -> None:
        pass


class LoggingObserver(SolverObserver):
    def __init__(self, logger: logging.Logger = log):
        self.log = logger

    def on_cycle(self, cycle: int, stall_count: int) -> None:
        self.log.debug(f'Cycle {cycle}, {stall_count} cycle(s) without progress')

    def on_group(self, kind: str, index: int) -> None:
        self.log.debug(f'Evaluating {kind} {index}')

    def on_commit(self, cell: Cell, rule: str) -> None:
        if rule == 'unique':
            self.log.info(f'Only one possible space for number {cell.value}: ({cell.row},{cell.col})')
        else:
            self.log.info(f'Only one possible number for ({cell.row},{cell.col}): {cell.value}')

    def on_pointing(self, number: int, kind: str, index: int, removed: List[Coord]) -> None:
        if removed:
            self.log.debug(f'Pointing: removed {number} from {kind} {index} at {removed}')

    def on_finish(self, result) -> None:
        self.log.debug(f'Finished in state {result.state.name} after {result.cycles} cycle(s)')


class MultiObserver(SolverObserver):
    """
    Forwards every hook to several observers in order.
    """

    def __init__(self, *observers: SolverObserver):
        self.observers = list(observers)

    def on_cycle(self, cycle: int, stall_count: int) -> None:
        for observer in self.observers:
            observer.on_cycle(cycle, stall_count)

    def on_group(self, kind: str, index: int) -> None:
        for observer in self.observers:
            observer.on_group(kind, index)

    def on_commit(self, cell: Cell, rule: str) -> None:
        for observer in self.observers:
            observer.on_commit(cell, rule)

    def on_pointing(self, number: int, kind: str, index: int, removed: List[Coord]) -> None:
        for observer in self.observers:
            observer.on_pointing(number, kind, index, removed)

    def on_finish(self, result) -> None:
        for observer in self.observers:
            observer.on_finish(result)
