from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal, Union

from commit_reveal import DEFAULT_ALGORITHM, Commitment, CommitmentEngine, CommitmentOrderingViolation
from rules import Move, Outcome, Relation, determine_outcome
from rules_table import format_table

RoundState = Literal["idle", "committed", "awaiting_move", "resolved"]

EXIT_TOKEN = "0"
HELP_TOKEN = "?"

OUTCOME_MESSAGES: dict[Outcome, str] = {
    "win": "You win!",
    "lose": "You lose!",
    "draw": "It's a draw!",
}


class InvalidInputToken(ValueError):
    pass


@dataclass(frozen=True)
class RoundResult:
    user_move: Move
    computer_move: Move
    outcome: Outcome
    key: str

    def lines(self) -> list[str]:
        return [
            f"Your move: {self.user_move}",
            f"Computer move: {self.computer_move}",
            OUTCOME_MESSAGES[self.outcome],
            f"HMAC key: {self.key}",
        ]


@dataclass(frozen=True)
class Reply:
    kind: Literal["help", "exit", "invalid", "resolved"]
    text: str = ""
    result: RoundResult | None = None


Token = Union[Literal["help", "exit"], int]


def parse_token(line: str, move_count: int) -> Token:
    token = line.strip()
    if token == HELP_TOKEN:
        return "help"
    if token == EXIT_TOKEN:
        return "exit"
    if not (token.isascii() and token.isdigit()):
        raise InvalidInputToken(token)
    index = int(token)
    if not 1 <= index <= move_count:
        raise InvalidInputToken(token)
    return index


class RoundController:
    """Drives a single round: commit, take one human move, resolve, reveal."""

    def __init__(
        self,
        relation: Relation,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        rng: random.Random | None = None,
        forced_index: int | None = None,
    ) -> None:
        self.relation = relation
        self.state: RoundState = "idle"
        self._engine = CommitmentEngine(len(relation.moves), algorithm=algorithm, rng=rng)
        self._forced_index = forced_index
        self._result: RoundResult | None = None

    @property
    def moves(self) -> tuple[Move, ...]:
        return self.relation.moves

    def start(self) -> Commitment:
        if self.state != "idle":
            raise CommitmentOrderingViolation(f"round already started (state={self.state})")
        commitment = self._engine.commit(self._forced_index)
        self.state = "committed"
        return commitment

    def menu(self) -> str:
        if self.state == "idle":
            raise CommitmentOrderingViolation("menu shown before the opponent committed")
        if self.state == "committed":
            self.state = "awaiting_move"
        lines = ["Available moves:"]
        lines += [f"{i} - {move}" for i, move in enumerate(self.moves, start=1)]
        lines += [f"{EXIT_TOKEN} - Exit", f"{HELP_TOKEN} - Help"]
        return "\n".join(lines)

    def handle(self, line: str) -> Reply:
        if self.state != "awaiting_move":
            raise CommitmentOrderingViolation(f"no move expected in state {self.state}")
        try:
            token = parse_token(line, len(self.moves))
        except InvalidInputToken:
            return Reply("invalid", text=self.menu())

        if token == "help":
            return Reply("help", text=format_table(self.relation))
        if token == "exit":
            return Reply("exit")
        result = self.resolve(token)
        return Reply("resolved", text="\n".join(result.lines()), result=result)

    def resolve(self, user_index: int) -> RoundResult:
        if self.state != "awaiting_move":
            raise CommitmentOrderingViolation(f"cannot resolve in state {self.state}")
        if not 1 <= user_index <= len(self.moves):
            raise InvalidInputToken(str(user_index))
        # The human move is fixed at this point, so the commitment can be opened.
        revealed = self._engine.reveal()
        outcome = determine_outcome(user_index, revealed.move_index, len(self.moves))
        self._result = RoundResult(
            user_move=self.moves[user_index - 1],
            computer_move=self.moves[revealed.move_index - 1],
            outcome=outcome,
            key=revealed.key,
        )
        self.state = "resolved"
        return self._result

    def reveal(self) -> str:
        """Key of a resolved round; repeated calls return the same key."""
        if self._result is None:
            raise CommitmentOrderingViolation("key is only disclosed after the round is resolved")
        return self._engine.reveal().key

    @property
    def result(self) -> RoundResult | None:
        return self._result
