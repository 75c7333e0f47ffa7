# solver.py
from typing import List, Optional, Set, Tuple

from .rng import RandomSource, shuffle

# ----------------------------
# Types
# ----------------------------
Position = Tuple[int, int]
Grid = List[List[int]]

SIZE = 9
DIGITS = tuple(range(1, SIZE + 1))


def clone_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def box_index(row: int, col: int) -> int:
    return (row // 3) * 3 + col // 3


# ----------------------------
# Constraints
# ----------------------------
def used_digits(grid: Grid, row: int, col: int) -> Set[int]:
    """Non-zero digits already in the row, column and box of (row, col)."""
    sub_row, sub_col = (row // 3) * 3, (col // 3) * 3
    used = set(grid[row])
    used.update(grid[r][col] for r in range(SIZE))
    used.update(grid[r][c] for r in range(sub_row, sub_row + 3) for c in range(sub_col, sub_col + 3))
    used.discard(0)
    return used


def is_valid(grid: Grid, row: int, col: int, candidate: int) -> bool:
    # The cell itself is compared too, so it should still be empty
    return candidate not in used_digits(grid, row, col)


def candidates(grid: Grid, row: int, col: int) -> List[int]:
    """Digits that can legally go into (row, col) given the filled cells."""
    used = used_digits(grid, row, col)
    return [d for d in DIGITS if d not in used]


def find_empty(grid: Grid) -> Optional[Position]:
    """Row-major scan; None once the grid is full."""
    return next(((r, c) for r, line in enumerate(grid) for c, v in enumerate(line) if v == 0), None)


# ----------------------------
# Backtracking
# ----------------------------
def solve(grid: Grid, random_source: Optional[RandomSource] = None) -> bool:
    """
    Fills every empty cell in place using classic backtracking.

    Cells are taken in row-major order. Candidates are tried 1..9, or in the
    order given by shuffling with `random_source` when one is supplied.
    Returns False when the grid has no completion; the grid contents are
    then unspecified.
    """
    pos = find_empty(grid)
    if not pos:
        return True  # Grid is complete
    row, col = pos
    nums = shuffle(DIGITS, random_source) if random_source else DIGITS
    for num in nums:
        if is_valid(grid, row, col, num):
            grid[row][col] = num
            if solve(grid, random_source):
                return True
            grid[row][col] = 0  # Backtrack
    return False


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """
    Counts the completions of `grid`, stopping as soon as `limit` is reached.
    Returns the count (capped at `limit`). The grid is left as it was given.

    Branches on the empty cell with the fewest candidates; the count does not
    depend on visiting order.
    """
    rows = [set() for _ in range(SIZE)]
    cols = [set() for _ in range(SIZE)]
    boxes = [set() for _ in range(SIZE)]
    empties: List[Position] = []
    for r in range(SIZE):
        for c in range(SIZE):
            value = grid[r][c]
            if value:
                rows[r].add(value)
                cols[c].add(value)
                boxes[box_index(r, c)].add(value)
            else:
                empties.append((r, c))

    count = 0

    def search() -> bool:
        nonlocal count
        best: Optional[Position] = None
        best_options: List[int] = []
        for r, c in empties:
            if grid[r][c]:
                continue
            used = rows[r] | cols[c] | boxes[box_index(r, c)]
            options = [d for d in DIGITS if d not in used]
            if best is None or len(options) < len(best_options):
                best, best_options = (r, c), options
                if len(options) <= 1:
                    break
        if best is None:
            # Reached a complete solution
            count += 1
            return count >= limit

        r, c = best
        b = box_index(r, c)
        for d in best_options:
            grid[r][c] = d
            rows[r].add(d)
            cols[c].add(d)
            boxes[b].add(d)
            done = search()
            grid[r][c] = 0
            rows[r].discard(d)
            cols[c].discard(d)
            boxes[b].discard(d)
            if done:
                return True
        return False

    search()
    return count


def format_grid(grid: Grid) -> str:
    lines = []
    for row_index in range(SIZE):
        row_str = ""
        for column_index in range(SIZE):
            val = grid[row_index][column_index]
            row_str += str(val) if val != 0 else "."
            if column_index in (2, 5):
                row_str += " | "
            elif column_index != SIZE - 1:
                row_str += " "
        lines.append(row_str)
        if row_index in (2, 5):
            lines.append("-" * 21)
    return "\n".join(lines)


def parse_grid(text: str) -> Grid:
    """
    Parses 81 cells given as digits, with '0' or '.' for blanks.
    Whitespace and '|' / '-' separators are ignored.
    """
    cells = [ch for ch in text if ch not in " \t\r\n|-+"]
    if len(cells) != SIZE * SIZE:
        raise ValueError(f"Expected 81 cells, got {len(cells)}.")
    values = []
    for ch in cells:
        if ch == ".":
            values.append(0)
        elif ch.isdigit():
            values.append(int(ch))
        else:
            raise ValueError(f"Invalid cell character {ch!r}.")
    return [values[i * SIZE:(i + 1) * SIZE] for i in range(SIZE)]


def grid_to_string(grid: Grid) -> str:
    return "".join(str(v) if v else "." for row in grid for v in row)
