# -*- coding: utf-8 -*-
"""Daily challenge: one seeded puzzle per local calendar day, plus streak bookkeeping."""
from typing import Optional
import datetime

from .config import DAILY_DIFFICULTY
from .models import DailyChallenge
from .sudoku_generator import GeneratedPuzzle, generate_seeded

DEFAULT_EPOCH = datetime.date(2024, 1, 1)
DEFAULT_SEED_MULTIPLIER = 12345


def local_today() -> datetime.date:
    """Today's date as the player sees it (local calendar, not UTC)."""
    return datetime.date.today()


def today_string(today: datetime.date) -> str:
    return today.isoformat()


def parse_date(text: Optional[str]) -> Optional[datetime.date]:
    """YYYY-MM-DD -> date; None for empty or unparseable input."""
    if not text:
        return None
    try:
        return datetime.date.fromisoformat(text)
    except (TypeError, ValueError):
        return None


def day_index(today: datetime.date, epoch: datetime.date = DEFAULT_EPOCH) -> int:
    return (today - epoch).days


def daily_seed(
    today: datetime.date,
    multiplier: int = DEFAULT_SEED_MULTIPLIER,
    epoch: datetime.date = DEFAULT_EPOCH,
) -> int:
    return day_index(today, epoch) * multiplier


def generate_daily(
    today: datetime.date,
    multiplier: int = DEFAULT_SEED_MULTIPLIER,
    epoch: datetime.date = DEFAULT_EPOCH,
) -> GeneratedPuzzle:
    """The puzzle for `today`: identical on every install."""
    return generate_seeded(DAILY_DIFFICULTY, daily_seed(today, multiplier, epoch))


def fresh_record(today: datetime.date) -> DailyChallenge:
    return DailyChallenge(date=today)


def roll_over(record: Optional[DailyChallenge], today: datetime.date) -> DailyChallenge:
    """
    Brings a stored record up to `today`:
      - nothing ever completed -> fresh record
      - last completion more than a day ago -> fresh record, streak lost
      - record already for today -> unchanged
      - otherwise keep the streak and open today's challenge
    """
    if record is None or record.last_completed_date is None:
        return fresh_record(today)
    if (today - record.last_completed_date).days > 1:
        return fresh_record(today)
    if record.date == today:
        return record
    return record.model_copy(update={"date": today, "completed": False, "best_time": None})


def record_completion(record: DailyChallenge, today: datetime.date, elapsed: int) -> DailyChallenge:
    """Marks today's challenge done; the streak continues only from yesterday."""
    yesterday = today - datetime.timedelta(days=1)
    streak = record.streak + 1 if record.last_completed_date == yesterday else 1
    return DailyChallenge(
        date=today,
        completed=True,
        best_time=elapsed,
        streak=streak,
        last_completed_date=today,
    )
