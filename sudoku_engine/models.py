# -*- coding: utf-8 -*-
from typing import Dict, List, Optional
import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import DIFFICULTIES, Difficulty

# Persisted JSON uses camelCase keys (isGiven, hintsRemaining, ...)
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Cell(BaseModel):
    model_config = _CAMEL

    value: int = Field(default=0, ge=0, le=9)
    is_given: bool = False
    notes: List[int] = Field(default_factory=list, description="Pencil marks, sorted ascending")
    is_error: bool = False
    is_correct: bool = False
    is_highlighted: bool = False


Board = List[List[Cell]]


class SelectedCell(BaseModel):
    row: int = Field(ge=0, le=8)
    col: int = Field(ge=0, le=8)


class HistoryEntry(BaseModel):
    board: Board
    mistakes: int


def _empty_best_times() -> Dict[str, Optional[int]]:
    return {d: None for d in DIFFICULTIES}


class Stats(BaseModel):
    model_config = _CAMEL

    games_played: int = Field(default=0, ge=0)
    games_won: int = Field(default=0, ge=0)
    best_time: Dict[str, Optional[int]] = Field(default_factory=_empty_best_times)
    current_streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)


class DailyChallenge(BaseModel):
    model_config = _CAMEL

    date: datetime.date
    completed: bool = False
    best_time: Optional[int] = None
    streak: int = Field(default=0, ge=0)
    last_completed_date: Optional[datetime.date] = None


class GameSnapshot(BaseModel):
    """Everything needed to resume an unfinished game after the app closes."""

    model_config = _CAMEL

    board: Board
    solution: List[List[int]]
    selected_cell: Optional[SelectedCell] = None
    difficulty: Difficulty = "medium"
    mistakes: int = Field(default=0, ge=0)
    hints_remaining: int = Field(default=3, ge=0)
    elapsed_time: int = Field(default=0, ge=0)
    note_mode: bool = False
    is_daily_challenge: bool = False
    is_playing: bool = False
    is_complete: bool = False


def board_from_puzzle(puzzle: List[List[int]]) -> Board:
    return [[Cell(value=value, is_given=value != 0) for value in row] for row in puzzle]


def copy_board(board: Board) -> Board:
    return [[cell.model_copy(deep=True) for cell in row] for row in board]
