import logging
from typing import NamedTuple, Optional

from .config import cells_to_remove
from .rng import RandomSource, default_random, seeded_random, shuffle
from .solver import DIGITS, SIZE, Grid, clone_grid, count_solutions, empty_grid, solve

logger = logging.getLogger(__name__)


class GeneratedPuzzle(NamedTuple):
    puzzle: Grid
    solution: Grid


# Class to generate a complete Sudoku board and create puzzles with a unique solution.
class SudokuGenerator:
    def __init__(self, random_source: Optional[RandomSource] = None):
        self.random = random_source or default_random()

    def generate_puzzle(self, difficulty: str = "easy") -> GeneratedPuzzle:
        """
        Generates a Sudoku puzzle (9x9) with a unique solution
        by removing cells based on the specified difficulty.
        """
        target_removed = cells_to_remove(difficulty)
        solution = self.generate_full_solution()
        puzzle = clone_grid(solution)
        removed = self.remove_cells_with_unique_check(puzzle, target_removed)
        logger.debug("Generated %s puzzle: removed %d of %d target cells", difficulty, removed, target_removed)
        return GeneratedPuzzle(puzzle, solution)

    def generate_full_solution(self) -> Grid:
        """
        Generates a complete Sudoku board (solved): the diagonal boxes are
        seeded first, then backtracking fills the rest.
        """
        board = empty_grid()
        self.fill_diagonal_boxes(board)
        if not solve(board, self.random):
            # Diagonal boxes never constrain each other, so this cannot happen
            raise RuntimeError("Failed to complete a seeded Sudoku board.")
        return board

    def fill_diagonal_boxes(self, board: Grid) -> None:
        for start in range(0, SIZE, 3):
            nums = shuffle(DIGITS, self.random)
            idx = 0
            for i in range(3):
                for j in range(3):
                    board[start + i][start + j] = nums[idx]
                    idx += 1

    def remove_cells_with_unique_check(self, board: Grid, target_removed: int) -> int:
        """
        Empties cells in random order, checking at each step that the
        solution stays unique. A removal that makes the puzzle ambiguous is
        undone and that cell stays a clue. Returns how many cells were removed,
        which can fall short of the target when positions run out.
        """
        positions = shuffle([(i // SIZE, i % SIZE) for i in range(SIZE * SIZE)], self.random)

        removed = 0
        for row, col in positions:
            if removed >= target_removed:
                break
            if board[row][col] == 0:
                continue
            backup = board[row][col]
            board[row][col] = 0
            board_copy = clone_grid(board)
            if count_solutions(board_copy, 2) == 1:
                removed += 1
            else:
                board[row][col] = backup

        if removed < target_removed:
            logger.debug("Stopped early: %d cells removed, target was %d", removed, target_removed)
        return removed


def generate(difficulty: str, random_source: Optional[RandomSource] = None) -> GeneratedPuzzle:
    return SudokuGenerator(random_source).generate_puzzle(difficulty)


def generate_seeded(difficulty: str, seed: int) -> GeneratedPuzzle:
    """Same algorithm as `generate`, reproducible for a given seed."""
    return SudokuGenerator(seeded_random(seed)).generate_puzzle(difficulty)
