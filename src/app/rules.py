from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Sequence

Move = str
Outcome = Literal["win", "lose", "draw"]


def determine_outcome(user_index: int, opponent_index: int, n: int) -> Outcome:
    """Outcome for the user, both indices 1-based in a list of ``n`` moves."""
    diff = (n + user_index - opponent_index) % n
    if diff == 0:
        return "draw"
    if diff <= (n - 1) // 2:
        return "win"
    return "lose"


@dataclass(frozen=True)
class Relation:
    """Complete win/lose/draw relation over an odd number of moves.

    ``beaten_by[m]`` holds the (N-1)/2 moves that follow ``m`` in the configured
    order (wrapping around); ``beats[m]`` holds the (N-1)/2 moves that precede it.
    """

    moves: tuple[Move, ...]
    beats: Mapping[Move, tuple[Move, ...]]
    beaten_by: Mapping[Move, tuple[Move, ...]]
    _positions: Mapping[Move, int] = field(repr=False, compare=False)

    def defeats(self, move: Move, other: Move) -> bool:
        return self.compare(move, other) == "win"

    def compare(self, move: Move, other: Move) -> Outcome:
        """Result of playing ``move`` against ``other``, in O(1)."""
        n = len(self.moves)
        distance = (self._positions[move] - self._positions[other]) % n
        if distance == 0:
            return "draw"
        if distance <= (n - 1) // 2:
            return "win"
        return "lose"

    def index_of(self, move: Move) -> int:
        return self._positions[move] + 1


def build_relation(moves: Sequence[Move]) -> Relation:
    # No validation here: callers pass an odd count >= 3 of unique names.
    ordered = tuple(moves)
    n = len(ordered)
    half = (n - 1) // 2

    beaten_by: dict[Move, tuple[Move, ...]] = {}
    beats: dict[Move, tuple[Move, ...]] = {}
    for p, move in enumerate(ordered):
        beaten_by[move] = tuple(ordered[(p + k) % n] for k in range(1, half + 1))
        beats[move] = tuple(ordered[(p - k) % n] for k in range(1, half + 1))

    positions = {move: p for p, move in enumerate(ordered)}
    return Relation(
        moves=ordered,
        beats=MappingProxyType(beats),
        beaten_by=MappingProxyType(beaten_by),
        _positions=MappingProxyType(positions),
    )
