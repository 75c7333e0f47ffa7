from .config import DIFFICULTIES, DIFFICULTY_CELLS_TO_REMOVE, EngineSettings
from .daily import day_index, daily_seed, generate_daily
from .game import GameStatus, SudokuGame, format_elapsed
from .models import Cell, DailyChallenge, GameSnapshot, Stats
from .rng import default_random, seeded_random
from .solver import count_solutions, is_valid, solve
from .storage import JsonFileStorage, MemoryStorage
from .sudoku_generator import GeneratedPuzzle, SudokuGenerator, generate, generate_seeded

__version__ = "1.0.0"
