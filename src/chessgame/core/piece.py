"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessgame.core.enums import Color, PieceType

# Uppercase letter per type; black pieces use the lowercase form in FEN.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


def piece_type_from_letter(letter: str) -> PieceType:
    """Piece type for a letter in either case, e.g. 'q' -> QUEEN."""
    try:
        return _TYPES_BY_LETTER[letter.upper()]
    except (KeyError, AttributeError):
        raise ValueError(f"Invalid piece letter: {letter!r}") from None


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece. Equal pieces are interchangeable."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'n' -> black knight."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, piece_type_from_letter(char))

    @property
    def letter(self) -> str:
        """Uppercase piece letter regardless of color, e.g. 'N'."""
        return _LETTERS[self.piece_type]
