from __future__ import annotations

from typing import Sequence

MIN_MOVES = 3

TOO_FEW = (
    "Not enough parameters!\n"
    "Please pass at least 3 parameters.\n"
    "Example: fair-rps play rock paper scissors"
)
EVEN_COUNT = (
    "Invalid parameters!\n"
    "Total amount should be odd!\n"
    "Example: fair-rps play rock paper scissors lizard Spock"
)
NOT_UNIQUE = "Invalid parameters!\nParameters must be unique"


class ConfigurationError(ValueError):
    def __init__(self, problems: list[str]) -> None:
        super().__init__("\n\n".join(problems))
        self.problems = problems


def find_duplicates(moves: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for move in moves:
        if move in seen and move not in dupes:
            dupes.append(move)
        seen.add(move)
    return dupes


def collect_problems(moves: Sequence[str]) -> list[str]:
    problems: list[str] = []
    if len(moves) < MIN_MOVES:
        problems.append(TOO_FEW)
    elif len(moves) % 2 == 0:
        problems.append(EVEN_COUNT)
    dupes = find_duplicates(moves)
    if dupes:
        problems.append(f"{NOT_UNIQUE} (repeated: {', '.join(dupes)})")
    return problems


def validate_moves(moves: Sequence[str]) -> list[str]:
    """Return the moves as a list, or raise ConfigurationError listing every broken rule."""
    problems = collect_problems(moves)
    if problems:
        raise ConfigurationError(problems)
    return list(moves)
