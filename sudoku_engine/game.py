# -*- coding: utf-8 -*-
"""Game session: selection, number entry, notes, hints, undo and win/loss.

Every player action checks its preconditions first and silently does
nothing when they do not hold (nothing selected, game paused or over, given
cell, empty history...). Actions return True only when they changed state.
"""
from collections import deque
from enum import Enum
from typing import Callable, Deque, Optional
import datetime
import logging

from .config import (
    DAILY_DIFFICULTY,
    DAILY_STORAGE_KEY,
    GAME_STATE_STORAGE_KEY,
    STATS_STORAGE_KEY,
    EngineSettings,
    DIFFICULTY_CELLS_TO_REMOVE,
)
from .daily import daily_seed, local_today, record_completion, roll_over
from .models import (
    Board,
    Cell,
    DailyChallenge,
    GameSnapshot,
    HistoryEntry,
    SelectedCell,
    Stats,
    board_from_puzzle,
    copy_board,
)
from .rng import RandomSource, seeded_random
from .solver import SIZE, Grid, clone_grid
from .storage import Storage, load_json, save_json
from .sudoku_generator import SudokuGenerator

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


def format_elapsed(seconds: int) -> str:
    """Timer label text, e.g. 125 -> '02:05'."""
    minutes = seconds // 60
    seconds = seconds % 60
    return f"{minutes:02}:{seconds:02}"


def _require_difficulty(difficulty: str) -> None:
    if difficulty not in DIFFICULTY_CELLS_TO_REMOVE:
        raise ValueError(f"Unknown difficulty {difficulty!r}; expected one of {', '.join(DIFFICULTY_CELLS_TO_REMOVE)}.")


def _same_house(row: int, col: int, r: int, c: int) -> bool:
    return r == row or c == col or (r // 3 == row // 3 and c // 3 == col // 3)


class SudokuGame:
    def __init__(
        self,
        storage: Optional[Storage] = None,
        settings: Optional[EngineSettings] = None,
        today: Callable[[], datetime.date] = local_today,
        random_source: Optional[RandomSource] = None,
    ):
        self.storage = storage
        self.settings = settings or EngineSettings()
        self.today = today
        self.random_source = random_source

        self.board: Board = board_from_puzzle([[0] * SIZE for _ in range(SIZE)])
        self.solution: Grid = []
        self.selected_cell: Optional[SelectedCell] = None
        self.difficulty = "medium"
        self.is_playing = False
        self.is_paused = False
        self.is_complete = False
        self.mistakes = 0
        self.max_mistakes = self.settings.max_mistakes
        self.hints_remaining = self.settings.initial_hints
        self.elapsed_time = 0
        self.note_mode = False
        self.is_daily_challenge = False
        self.history: Deque[HistoryEntry] = deque(maxlen=self.settings.history_limit)

        self.stats = Stats()
        self.daily_challenge = DailyChallenge(date=self.today())
        # Saved counters must be in memory before the first win writes them back
        if storage is not None:
            self.load_stats()
            self.load_daily_challenge()

    # ── State ───────────────────────────────────────────────────────────────

    @property
    def status(self) -> GameStatus:
        if not self.solution:
            return GameStatus.IDLE
        if self.is_complete:
            return GameStatus.LOST if self.mistakes >= self.max_mistakes else GameStatus.WON
        if self.is_playing:
            return GameStatus.PLAYING
        return GameStatus.IDLE

    @property
    def elapsed_label(self) -> str:
        return format_elapsed(self.elapsed_time)

    def _can_act(self) -> bool:
        return self.is_playing and not self.is_paused

    def _selected(self) -> Optional[Cell]:
        if self.selected_cell is None:
            return None
        return self.board[self.selected_cell.row][self.selected_cell.col]

    def is_board_solved(self) -> bool:
        return all(
            self.board[r][c].value == self.solution[r][c]
            for r in range(SIZE)
            for c in range(SIZE)
        )

    def empty_cell_count(self) -> int:
        return sum(1 for row in self.board for cell in row if cell.value == 0)

    # ── New game ────────────────────────────────────────────────────────────

    def start_new_game(self, difficulty: str) -> None:
        """
        Generates a fresh puzzle for `difficulty` and starts playing it.
        Raises ValueError for an unknown difficulty.
        """
        puzzle, solution = SudokuGenerator(self.random_source).generate_puzzle(difficulty)
        self.load_puzzle(puzzle, solution, difficulty)

    def start_daily_challenge(self) -> None:
        """
        Starts today's challenge: always medium, and the same board for
        everyone on the same local date.
        """
        seed = daily_seed(
            self.today(),
            multiplier=self.settings.daily_seed_multiplier,
            epoch=self.settings.daily_epoch,
        )
        puzzle, solution = SudokuGenerator(seeded_random(seed)).generate_puzzle(DAILY_DIFFICULTY)
        self.load_puzzle(puzzle, solution, DAILY_DIFFICULTY, is_daily_challenge=True)

    def load_puzzle(
        self,
        puzzle: Grid,
        solution: Grid,
        difficulty: str,
        is_daily_challenge: bool = False,
    ) -> None:
        """
        Starts a session on an already generated puzzle/solution pair.
        Raises ValueError for an unknown difficulty (a caller bug, not a UI state).
        """
        _require_difficulty(difficulty)
        self.board = board_from_puzzle(puzzle)
        self.solution = clone_grid(solution)
        self.selected_cell = None
        self.difficulty = difficulty
        self.is_playing = True
        self.is_paused = False
        self.is_complete = False
        self.mistakes = 0
        self.hints_remaining = self.settings.initial_hints
        self.elapsed_time = 0
        self.note_mode = False
        self.history.clear()
        self.is_daily_challenge = is_daily_challenge
        logger.info("Started %s game (daily=%s)", difficulty, is_daily_challenge)
        self.save_game_state()

    # ── Cell selection ──────────────────────────────────────────────────────

    def select_cell(self, row: int, col: int) -> bool:
        if not self._can_act():
            return False
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            return False

        self.selected_cell = SelectedCell(row=row, col=col)
        self._highlight_selection()
        return True

    def _highlight_selection(self) -> None:
        sel = self.selected_cell
        for r in range(SIZE):
            for c in range(SIZE):
                self.board[r][c].is_highlighted = sel is not None and _same_house(sel.row, sel.col, r, c)

    # ── Number entry ────────────────────────────────────────────────────────

    def enter_number(self, num: int) -> bool:
        """
        Writes `num` into the selected cell, or toggles it as a pencil mark
        in note mode. A wrong value costs a mistake; a right one removes
        `num` from the notes of every cell in the same row, column and box.
        """
        cell = self._selected()
        if cell is None or not self._can_act() or cell.is_given:
            return False
        if num not in range(1, SIZE + 1):
            return False

        # Save current state to history before making changes
        self.history.append(HistoryEntry(board=copy_board(self.board), mistakes=self.mistakes))

        row, col = self.selected_cell.row, self.selected_cell.col

        if self.note_mode:
            notes = set(cell.notes)
            notes.symmetric_difference_update({num})
            cell.notes = sorted(notes)
            cell.value = 0
            cell.is_error = False
            cell.is_correct = False
            self.save_game_state()
            return True

        cell.value = num
        cell.notes = []

        if num != self.solution[row][col]:
            cell.is_error = True
            cell.is_correct = False
            self.mistakes += 1
            if self.mistakes >= self.max_mistakes:
                self._finish_loss()
            self.save_game_state()
            return True

        cell.is_error = False
        cell.is_correct = True
        # A placed digit is no longer a candidate anywhere in its houses
        for r in range(SIZE):
            for c in range(SIZE):
                if _same_house(row, col, r, c) and num in self.board[r][c].notes:
                    self.board[r][c].notes = [n for n in self.board[r][c].notes if n != num]

        if self.is_board_solved():
            self._finish_win()
        self.save_game_state()
        return True

    # ── Clear / erase ───────────────────────────────────────────────────────

    def clear_cell(self) -> bool:
        # Erasing is not recorded in the undo history
        cell = self._selected()
        if cell is None or not self._can_act() or cell.is_given:
            return False

        cell.value = 0
        cell.notes = []
        cell.is_error = False
        cell.is_correct = False
        self.save_game_state()
        return True

    def toggle_note_mode(self) -> None:
        self.note_mode = not self.note_mode

    # ── Hint ────────────────────────────────────────────────────────────────

    def use_hint(self) -> bool:
        cell = self._selected()
        if cell is None or not self._can_act() or self.hints_remaining <= 0:
            return False
        row, col = self.selected_cell.row, self.selected_cell.col
        if cell.is_given or cell.value == self.solution[row][col]:
            return False

        cell.value = self.solution[row][col]
        cell.notes = []
        cell.is_error = False
        cell.is_correct = True
        self.hints_remaining -= 1

        if self.is_board_solved():
            self._finish_win()
        self.save_game_state()
        return True

    # ── Undo ────────────────────────────────────────────────────────────────

    def undo(self) -> bool:
        """Restores the board and mistake count; hints and timer are not versioned."""
        if not self._can_act() or not self.history:
            return False

        last_state = self.history.pop()
        self.board = last_state.board
        self.mistakes = last_state.mistakes
        # Highlights follow the current selection, not the one at snapshot time
        self._highlight_selection()
        self.save_game_state()
        return True

    # ── Pause / resume / timer ──────────────────────────────────────────────

    def pause_game(self) -> None:
        self.is_paused = True

    def resume_game(self) -> None:
        self.is_paused = False

    def update_time(self) -> None:
        """One timer tick. The caller ticks only while playing and unpaused."""
        self.elapsed_time += 1

    def set_difficulty(self, difficulty: str) -> None:
        """Raises ValueError for an unknown difficulty."""
        _require_difficulty(difficulty)
        self.difficulty = difficulty

    # ── Game over ───────────────────────────────────────────────────────────

    def _finish_loss(self) -> None:
        self.is_playing = False
        self.is_complete = True
        self.stats.games_played += 1
        self.stats.current_streak = 0
        logger.info("Game lost after %d mistakes", self.mistakes)
        self.save_stats()

    def _finish_win(self) -> None:
        self.is_playing = False
        self.is_complete = True

        stats = self.stats
        stats.games_played += 1
        stats.games_won += 1
        stats.current_streak += 1
        if stats.current_streak > stats.best_streak:
            stats.best_streak = stats.current_streak
        best = stats.best_time.get(self.difficulty)
        if best is None or self.elapsed_time < best:
            stats.best_time[self.difficulty] = self.elapsed_time
        logger.info("Game won: %s in %s", self.difficulty, self.elapsed_label)
        self.save_stats()

        if self.is_daily_challenge:
            today = self.today()
            record = roll_over(self.daily_challenge, today)
            if not record.completed:
                record = record_completion(record, today, self.elapsed_time)
            self.daily_challenge = record
            self.save_daily_challenge()

    # ── Persistence ─────────────────────────────────────────────────────────

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=copy_board(self.board),
            solution=clone_grid(self.solution),
            selected_cell=self.selected_cell,
            difficulty=self.difficulty,
            mistakes=self.mistakes,
            hints_remaining=self.hints_remaining,
            elapsed_time=self.elapsed_time,
            note_mode=self.note_mode,
            is_daily_challenge=self.is_daily_challenge,
            is_playing=self.is_playing,
            is_complete=self.is_complete,
        )

    def save_game_state(self) -> bool:
        if self.storage is None:
            return False
        return save_json(self.storage, GAME_STATE_STORAGE_KEY, self.snapshot())

    def load_game_state(self) -> bool:
        """
        Resumes an unfinished game from storage. The game comes back paused
        so the player sees the board before the clock runs again.
        """
        saved = load_json(self.storage, GAME_STATE_STORAGE_KEY, GameSnapshot)
        if saved is None or not saved.board or not saved.solution:
            return False
        if len(saved.board) != SIZE or len(saved.solution) != SIZE or any(len(row) != SIZE for row in saved.board + saved.solution):
            logger.warning("Ignoring saved game with a malformed board")
            return False
        if not saved.is_playing or saved.is_complete:
            return False

        self.board = saved.board
        self.solution = saved.solution
        self.selected_cell = saved.selected_cell
        self.difficulty = saved.difficulty
        self.mistakes = saved.mistakes
        self.hints_remaining = saved.hints_remaining
        self.elapsed_time = saved.elapsed_time
        self.note_mode = saved.note_mode
        self.is_daily_challenge = saved.is_daily_challenge
        self.is_playing = True
        self.is_paused = True
        self.is_complete = False
        self.history.clear()
        return True

    def load_stats(self) -> None:
        saved = load_json(self.storage, STATS_STORAGE_KEY, Stats)
        if saved is not None:
            self.stats = saved

    def save_stats(self) -> bool:
        return save_json(self.storage, STATS_STORAGE_KEY, self.stats)

    def load_daily_challenge(self) -> None:
        """Loads the daily record and rolls it over to today. Bad data means a fresh record."""
        saved = load_json(self.storage, DAILY_STORAGE_KEY, DailyChallenge)
        self.daily_challenge = roll_over(saved, self.today())

    def save_daily_challenge(self) -> bool:
        return save_json(self.storage, DAILY_STORAGE_KEY, self.daily_challenge)
