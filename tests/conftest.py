# tests/conftest.py
import datetime

import pytest

from sudoku_engine.game import SudokuGame
from sudoku_engine.storage import MemoryStorage

PUZZLE = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

TODAY = datetime.date(2025, 3, 14)


def empty_positions(puzzle):
    return [(r, c) for r in range(9) for c in range(9) if puzzle[r][c] == 0]


def board_values(game):
    return [[cell.value for cell in row] for row in game.board]


def assert_valid_solution(grid):
    """Every row, column and box holds 1..9 exactly once."""
    digits = set(range(1, 10))
    for i in range(9):
        assert set(grid[i]) == digits
        assert {grid[r][i] for r in range(9)} == digits
        br, bc = 3 * (i // 3), 3 * (i % 3)
        assert {grid[br + r][bc + c] for r in range(3) for c in range(3)} == digits


@pytest.fixture
def puzzle():
    return [row[:] for row in PUZZLE]


@pytest.fixture
def solution():
    return [row[:] for row in SOLUTION]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def game(storage):
    g = SudokuGame(storage=storage, today=lambda: TODAY)
    g.load_puzzle(PUZZLE, SOLUTION, "easy")
    return g
