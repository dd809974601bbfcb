from __future__ import annotations

import re

# Faces, wide faces, slices and rotations; case-insensitive per token.
MOVE_LETTERS = "UDLRFBudlrfbMESxyz"
MOVE_SUFFIXES = ("", "'", "2")

_MOVE_PATTERN = re.compile(rf"[{MOVE_LETTERS}]['2]?", re.IGNORECASE)

# Only the horizontal face pair swaps; everything else maps to itself.
MIRROR_LETTERS = {"R": "L", "L": "R"}
MIRROR_SUFFIXES = {"": "'", "'": "", "2": "2"}


def is_legal_move(token: str) -> bool:
    return _MOVE_PATTERN.fullmatch(token) is not None


def sanitize_line(line: str) -> str:
    tokens = line.strip().split(" ")
    return " ".join(token for token in tokens if is_legal_move(token))


def sanitize_algorithms(text: str) -> list[str]:
    """Split raw input into normalized algorithms, dropping illegal tokens and empty lines."""
    algorithms: list[str] = []
    for line in text.split("\n"):
        cleaned = sanitize_line(line)
        if cleaned:
            algorithms.append(cleaned)
    return algorithms


def split_move_modifier(move: str) -> tuple[str, str]:
    if move.endswith("2"):
        return move[:-1], "2"
    if move.endswith("'"):
        return move[:-1], "'"
    return move, ""


def mirror_move(move: str) -> str:
    base, modifier = split_move_modifier(move)
    if not base:
        raise ValueError("Move must be non-empty")
    return f"{MIRROR_LETTERS.get(base, base)}{MIRROR_SUFFIXES[modifier]}"


def mirror_algorithm(algorithm: str) -> str:
    """Reflect an algorithm left-to-right.

    R and L trade places and every turn direction flips, double turns stay
    double. Slices, wide moves and rotations keep their letter, so this is
    not a full geometric mirror for those moves.
    """
    return " ".join(mirror_move(move) for move in algorithm.split())
