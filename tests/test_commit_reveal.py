from __future__ import annotations

import hashlib
import hmac
import random
import re
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

from commit_reveal import (  # type: ignore[import-not-found]  # noqa: E402
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    CommitmentEngine,
    CommitmentOrderingViolation,
    compute_commitment,
    generate_key,
    verify_commitment,
)


def test_digest_is_hmac_sha3_of_index_text() -> None:
    key = bytes(range(32))
    expected = hmac.new(key, b"3", hashlib.sha3_256).hexdigest()
    assert compute_commitment(key=key, move_index=3) == expected
    assert DEFAULT_ALGORITHM == "HMAC-SHA3-256"


def test_generated_key_has_256_bits() -> None:
    assert len(generate_key()) == 32
    assert generate_key() != generate_key()


def test_commit_then_reveal_verifies() -> None:
    engine = CommitmentEngine(5, rng=random.Random(7))
    commitment = engine.commit()
    revealed = engine.reveal()

    assert re.fullmatch(r"[0-9a-f]{64}", commitment.digest)
    assert re.fullmatch(r"[0-9a-f]{64}", revealed.key)
    assert 1 <= revealed.move_index <= 5
    assert engine.verify(commitment.digest, commitment.algorithm, revealed.key, revealed.move_index)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_only_the_chosen_index_verifies(algorithm: str) -> None:
    engine = CommitmentEngine(7, algorithm=algorithm)
    commitment = engine.commit(forced_index=4)
    key = engine.reveal().key

    for claimed in range(1, 8):
        ok = verify_commitment(digest=commitment.digest, algorithm=algorithm, key=key, move_index=claimed)
        assert ok is (claimed == 4)


def test_tampering_with_any_field_fails() -> None:
    engine = CommitmentEngine(3)
    commitment = engine.commit(forced_index=2)
    key = engine.reveal().key

    other_key = generate_key().hex()
    flipped = ("0" if commitment.digest[0] != "0" else "1") + commitment.digest[1:]

    assert CommitmentEngine.verify(commitment.digest, commitment.algorithm, key, 2)
    assert not CommitmentEngine.verify(commitment.digest, commitment.algorithm, other_key, 2)
    assert not CommitmentEngine.verify(flipped, commitment.algorithm, key, 2)
    assert not CommitmentEngine.verify(commitment.digest, "HMAC-SHA256", key, 2)
    assert not CommitmentEngine.verify(commitment.digest, commitment.algorithm, key, 3)


def test_malformed_inputs_do_not_verify() -> None:
    engine = CommitmentEngine(3)
    commitment = engine.commit(forced_index=1)
    key = engine.reveal().key

    assert not verify_commitment(digest=commitment.digest, algorithm="HMAC-MD5", key=key, move_index=1)
    assert not verify_commitment(digest=commitment.digest, algorithm=commitment.algorithm, key="zz", move_index=1)
    assert not verify_commitment(digest="é", algorithm=commitment.algorithm, key=key, move_index=1)


def test_reveal_before_commit_is_an_ordering_violation() -> None:
    with pytest.raises(CommitmentOrderingViolation):
        CommitmentEngine(3).reveal()


def test_commit_happens_once_per_engine() -> None:
    engine = CommitmentEngine(3)
    engine.commit()
    with pytest.raises(CommitmentOrderingViolation):
        engine.commit()


def test_reveal_is_idempotent() -> None:
    engine = CommitmentEngine(5)
    engine.commit()
    assert engine.reveal() == engine.reveal()


def test_engine_keeps_secrets_out_of_repr_and_commitment() -> None:
    engine = CommitmentEngine(9)
    commitment = engine.commit(forced_index=6)
    text = repr(engine) + repr(commitment)
    key = engine.reveal().key

    assert key not in text
    assert repr(engine) == "CommitmentEngine(move_count=9, algorithm='HMAC-SHA3-256', committed)"
    assert not hasattr(commitment, "key")


def test_forced_index_must_be_in_range() -> None:
    with pytest.raises(ValueError):
        CommitmentEngine(3).commit(forced_index=4)


def test_unknown_algorithm_is_rejected() -> None:
    with pytest.raises(ValueError):
        CommitmentEngine(3, algorithm="HMAC-MD5")


def test_moves_are_drawn_from_the_whole_range() -> None:
    rng = random.Random(1)
    seen = set()
    for _ in range(200):
        engine = CommitmentEngine(5, rng=rng)
        engine.commit()
        seen.add(engine.reveal().move_index)
    assert seen == {1, 2, 3, 4, 5}
