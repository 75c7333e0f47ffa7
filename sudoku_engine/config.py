# -*- coding: utf-8 -*-
from typing import Dict, Literal, Optional
import datetime
import os

from pydantic import BaseModel, Field

Difficulty = Literal["easy", "medium", "hard", "expert"]

DIFFICULTIES = ("easy", "medium", "hard", "expert")

# Empty cells out of 81 per difficulty
DIFFICULTY_CELLS_TO_REMOVE: Dict[str, int] = {
    "easy": 35,
    "medium": 45,
    "hard": 52,
    "expert": 58,
}

DAILY_DIFFICULTY = "medium"

# --------- Storage keys ---------
STATS_STORAGE_KEY = "sudoku_stats"
DAILY_STORAGE_KEY = "sudoku_daily"
GAME_STATE_STORAGE_KEY = "sudoku_game_state"


class EngineSettings(BaseModel):
    max_mistakes: int = Field(default=3, ge=1, description="Wrong entries that end the game")
    initial_hints: int = Field(default=3, ge=0, description="Hint budget per session")
    history_limit: int = Field(default=20, ge=1, description="Undo snapshots kept per session")
    daily_epoch: datetime.date = Field(default=datetime.date(2024, 1, 1), description="Day 0 of the daily challenge")
    daily_seed_multiplier: int = Field(default=12345, ge=1, description="Day index -> RNG seed multiplier")
    storage_dir: Optional[str] = Field(default=None, description="Folder for JsonFileStorage (None = no persistence)")
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_env(cls, **overrides) -> "EngineSettings":
        """
        Builds settings from SUDOKU_* environment variables;
        explicit keyword overrides win over the environment.
        """
        env = {
            "max_mistakes": os.getenv("SUDOKU_MAX_MISTAKES"),
            "initial_hints": os.getenv("SUDOKU_INITIAL_HINTS"),
            "history_limit": os.getenv("SUDOKU_HISTORY_LIMIT"),
            "daily_epoch": os.getenv("SUDOKU_DAILY_EPOCH"),
            "daily_seed_multiplier": os.getenv("SUDOKU_DAILY_SEED_MULTIPLIER"),
            "storage_dir": os.getenv("SUDOKU_STORAGE_DIR"),
            "log_level": os.getenv("SUDOKU_LOG_LEVEL"),
        }
        values = {k: v for k, v in env.items() if v not in (None, "")}
        values.update(overrides)
        return cls(**values)


def cells_to_remove(difficulty: str) -> int:
    try:
        return DIFFICULTY_CELLS_TO_REMOVE[difficulty]
    except KeyError:
        raise ValueError(f"Unknown difficulty {difficulty!r}; expected one of {', '.join(DIFFICULTIES)}.")
