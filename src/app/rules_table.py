from __future__ import annotations

from rules import Relation

CORNER = " v You / PC > "
_LABELS = {"win": "WIN", "lose": "LOSE", "draw": "DRAW"}


def format_table(relation: Relation) -> str:
    """Render the help matrix. Each cell is the result for the row move against the column move."""
    moves = relation.moves
    first = max(len(CORNER), *(len(m) for m in moves))
    widths = [max(len(m), 4) for m in moves]

    lines: list[str] = []
    header = f"{CORNER:{first}}  " + "  ".join(f"{m:>{w}}" for m, w in zip(moves, widths))
    lines.append(header)
    lines.append("-" * len(header))
    for row in moves:
        cells = "  ".join(f"{_LABELS[relation.compare(row, col)]:>{w}}" for col, w in zip(moves, widths))
        lines.append(f"{row:{first}}  {cells}")
    return "\n".join(lines)
