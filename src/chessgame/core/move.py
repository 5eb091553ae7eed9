"""Move record value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessgame.core.enums import MoveKind, PieceType
from chessgame.core.piece import Piece
from chessgame.core.types import Position

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a single move.

    A promoting move produced by the generator has ``promotion=None`` until
    the caller chooses the piece with :meth:`with_promotion`.
    """

    from_pos: Position
    to_pos: Position
    piece: Piece
    captured: Piece | None = None
    promotion: PieceType | None = None
    kind: MoveKind = MoveKind.NORMAL

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castle(self) -> bool:
        return self.kind in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)

    @property
    def requires_promotion(self) -> bool:
        return self.kind == MoveKind.PROMOTION

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and abs(self.to_pos.row - self.from_pos.row) == 2
        )

    def with_promotion(self, piece_type: PieceType) -> Move:
        return replace(self, promotion=piece_type)

    # -- Display --------------------------------------------------------------

    def __str__(self) -> str:
        """UCI long-algebraic text, e.g. ``e7e8q``."""
        base = f"{self.from_pos.name}{self.to_pos.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
