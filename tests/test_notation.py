from __future__ import annotations

import pytest

from algimg.notation import is_legal_move, mirror_algorithm, mirror_move, sanitize_algorithms, sanitize_line


def test_illegal_tokens_are_dropped_in_order() -> None:
    assert sanitize_line("R U2 Q F'  ") == "R U2 F'"


def test_tokens_keep_their_case() -> None:
    assert sanitize_line("r u' M2 x y' z2") == "r u' M2 x y' z2"
    assert sanitize_line("m X") == "m X"


def test_compound_and_malformed_tokens_are_rejected() -> None:
    assert not is_legal_move("RU")
    assert not is_legal_move("R2'")
    assert not is_legal_move("R3")
    assert not is_legal_move("2")
    assert not is_legal_move("")
    assert is_legal_move("B'")


def test_lines_with_only_illegal_tokens_vanish() -> None:
    text = "R U R' U'\nQ W 3\n\n   \nF2 B2\r\n"
    assert sanitize_algorithms(text) == ["R U R' U'", "F2 B2"]


def test_repeated_spaces_collapse_to_single_space() -> None:
    assert sanitize_algorithms("  R   U  ") == ["R U"]


def test_mirror_swaps_right_and_left() -> None:
    assert mirror_algorithm("R U R'") == "L U' L"
    assert mirror_algorithm("R U R' U'") == "L U' L' U"


def test_mirror_twice_restores_algorithm() -> None:
    for alg in ["R U R'", "R U R' U'", "F2 B2", "L' D2 x y'"]:
        assert mirror_algorithm(mirror_algorithm(alg)) == alg


def test_mirror_suffix_law() -> None:
    for letter in "UDLRFBMESxyz":
        assert mirror_move(letter).endswith("'")
        assert mirror_move(f"{letter}'") == mirror_move(letter)[:-1]
        assert mirror_move(f"{letter}2").endswith("2")


def test_mirror_keeps_slices_rotations_and_wide_moves() -> None:
    assert mirror_algorithm("M x r l U F B D") == "M' x' r' l' U' F' B' D'"


def test_mirror_keeps_token_count() -> None:
    alg = "R U2 F' x M2 l"
    assert len(mirror_algorithm(alg).split(" ")) == len(alg.split(" "))
    assert mirror_algorithm("") == ""


def test_mirror_move_rejects_empty_base() -> None:
    with pytest.raises(ValueError):
        mirror_move("'")
