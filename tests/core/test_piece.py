"""Tests for the Piece value object."""

import pytest

from chessgame.core.enums import Color, PieceType
from chessgame.core.piece import Piece, piece_type_from_letter


class TestPiece:
    @pytest.mark.parametrize(
        ("char", "color", "piece_type"),
        [
            ("K", Color.WHITE, PieceType.KING),
            ("n", Color.BLACK, PieceType.KNIGHT),
            ("p", Color.BLACK, PieceType.PAWN),
            ("Q", Color.WHITE, PieceType.QUEEN),
        ],
    )
    def test_from_char(self, char: str, color: Color, piece_type: PieceType) -> None:
        piece = Piece.from_char(char)
        assert piece == Piece(color, piece_type)
        assert str(piece) == char

    @pytest.mark.parametrize("char", ["x", "", "NN", "1"])
    def test_from_char_rejects(self, char: str) -> None:
        with pytest.raises(ValueError):
            Piece.from_char(char)

    def test_letter_ignores_color(self) -> None:
        assert Piece(Color.BLACK, PieceType.ROOK).letter == "R"
        assert Piece(Color.WHITE, PieceType.BISHOP).letter == "B"


class TestPieceTypeFromLetter:
    def test_either_case(self) -> None:
        assert piece_type_from_letter("q") == PieceType.QUEEN
        assert piece_type_from_letter("N") == PieceType.KNIGHT

    @pytest.mark.parametrize("letter", ["", "Z", "qq"])
    def test_rejects_unknown(self, letter: str) -> None:
        with pytest.raises(ValueError):
            piece_type_from_letter(letter)
