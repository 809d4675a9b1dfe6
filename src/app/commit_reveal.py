from __future__ import annotations

import hashlib
import hmac
import random
import secrets
from dataclasses import dataclass
from typing import Any, Callable, Final

DEFAULT_ALGORITHM: Final[str] = "HMAC-SHA3-256"
KEY_BYTES: Final[int] = 32

_HASHES: Final[dict[str, Callable[..., Any]]] = {
    "HMAC-SHA3-256": hashlib.sha3_256,
    "HMAC-SHA256": hashlib.sha256,
}

ALGORITHMS: Final[tuple[str, ...]] = tuple(_HASHES)


class CommitmentOrderingViolation(RuntimeError):
    """Reveal or resolve attempted out of order. Always a bug in the caller."""


@dataclass(frozen=True)
class Commitment:
    digest: str
    algorithm: str


@dataclass(frozen=True)
class Reveal:
    key: str
    move_index: int


def generate_key(num_bytes: int = KEY_BYTES) -> bytes:
    return secrets.token_bytes(num_bytes)


def canonical_string(move_index: int) -> str:
    return str(move_index)


def compute_commitment(*, key: bytes, move_index: int, algorithm: str = DEFAULT_ALGORITHM) -> str:
    digestmod = _HASHES[algorithm]
    payload = canonical_string(move_index).encode("utf-8")
    return hmac.new(key, payload, digestmod).hexdigest()


def verify_commitment(*, digest: str, algorithm: str, key: str, move_index: int) -> bool:
    """Recompute the digest from a revealed hex key and compare.

    Anything malformed (unknown algorithm, non-hex key) simply fails to verify.
    """
    if algorithm not in _HASHES:
        return False
    try:
        raw_key = bytes.fromhex(key)
    except ValueError:
        return False
    computed = compute_commitment(key=raw_key, move_index=move_index, algorithm=algorithm)
    return secrets.compare_digest(digest.lower().encode("utf-8"), computed.encode("ascii"))


class CommitmentEngine:
    """Picks the opponent move for one round and commits to it.

    Only ``commit``, ``reveal`` and ``verify`` are public. The key and the chosen
    index are not readable until ``reveal`` is called.
    """

    def __init__(self, move_count: int, *, algorithm: str = DEFAULT_ALGORITHM, rng: random.Random | None = None) -> None:
        if algorithm not in _HASHES:
            raise ValueError(f"unsupported algorithm: {algorithm}")
        self._move_count = move_count
        self._algorithm = algorithm
        self._rng = rng or random.Random()
        self._key: bytes | None = None
        self._move_index: int | None = None
        self._commitment: Commitment | None = None

    def __repr__(self) -> str:
        state = "committed" if self._commitment is not None else "fresh"
        return f"CommitmentEngine(move_count={self._move_count}, algorithm={self._algorithm!r}, {state})"

    def commit(self, forced_index: int | None = None) -> Commitment:
        if self._commitment is not None:
            raise CommitmentOrderingViolation("this round already has a commitment")
        if forced_index is not None and not 1 <= forced_index <= self._move_count:
            raise ValueError(f"forced_index must be in 1..{self._move_count}")

        # Gameplay randomness and key material come from different sources.
        move_index = forced_index if forced_index is not None else self._rng.randint(1, self._move_count)
        key = generate_key()

        self._move_index = move_index
        self._key = key
        self._commitment = Commitment(
            digest=compute_commitment(key=key, move_index=move_index, algorithm=self._algorithm),
            algorithm=self._algorithm,
        )
        return self._commitment

    def reveal(self) -> Reveal:
        if self._key is None or self._move_index is None:
            raise CommitmentOrderingViolation("nothing to reveal before commit()")
        return Reveal(key=self._key.hex(), move_index=self._move_index)

    @staticmethod
    def verify(digest: str, algorithm: str, key: str, claimed_index: int) -> bool:
        return verify_commitment(digest=digest, algorithm=algorithm, key=key, move_index=claimed_index)
