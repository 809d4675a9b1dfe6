from __future__ import annotations

import argparse

from commit_reveal import ALGORITHMS, DEFAULT_ALGORITHM, verify_commitment
from round_controller import RoundController
from rules import build_relation
from validation import ConfigurationError, validate_moves

PROMPT = "Enter your move: "


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="fair-rps")
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one round against the computer")
    play.add_argument("moves", nargs="*", metavar="MOVE", help="Odd number (>= 3) of unique move names")
    play.add_argument("--algorithm", choices=ALGORITHMS, default=DEFAULT_ALGORITHM)

    verify = sub.add_parser("verify", help="Check a revealed key against a published HMAC")
    verify.add_argument("--digest", required=True, help="HMAC shown before your move (hex)")
    verify.add_argument("--key", required=True, help="HMAC key shown after the round (hex)")
    verify.add_argument("--move-index", required=True, type=int, help="Computer move number from the menu")
    verify.add_argument("--algorithm", default=DEFAULT_ALGORITHM)

    args = parser.parse_args(argv)

    if args.cmd == "verify":
        ok = verify_commitment(
            digest=args.digest,
            algorithm=args.algorithm,
            key=args.key,
            move_index=args.move_index,
        )
        print("OK" if ok else "MISMATCH")
        return 0 if ok else 1

    if args.cmd == "play":
        try:
            moves = validate_moves(args.moves)
        except ConfigurationError as exc:
            raise SystemExit(str(exc))
        return play_round(RoundController(build_relation(moves), algorithm=args.algorithm))

    raise SystemExit("unhandled command")


def play_round(controller: RoundController) -> int:
    commitment = controller.start()
    print(f"HMAC: {commitment.digest}")
    print(f"Algorithm: {commitment.algorithm}")
    print(controller.menu())

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            # Closed stdin counts as choosing Exit.
            return 0

        reply = controller.handle(line)
        if reply.kind == "exit":
            return 0
        print(reply.text)
        if reply.kind == "resolved":
            return 0


if __name__ == "__main__":
    raise SystemExit(main())
