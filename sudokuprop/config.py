import os


package_path = os.path.dirname(__file__)
data_path = os.path.join(package_path, 'data')

puzzles_path = os.path.join(data_path, 'puzzles.txt')

GRID_SIZE = 9
BOX_SIZE = 3

# Number of consecutive cycles without a commit before the solver gives up
STALL_THRESHOLD = 5

REFERENCE_PUZZLE = [
    [2, 0, 3, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 9, 7, 0, 0, 4, 0],
    [0, 0, 0, 4, 5, 0, 0, 0, 0],
    [3, 0, 0, 6, 0, 9, 0, 0, 0],
    [6, 0, 0, 0, 0, 0, 5, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 7, 1],
    [0, 8, 0, 0, 0, 0, 0, 0, 0],
    [0, 9, 0, 0, 0, 0, 2, 0, 8],
    [0, 0, 0, 7, 4, 0, 0, 0, 0],
]
