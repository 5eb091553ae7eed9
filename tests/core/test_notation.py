"""Tests for move text, history formatting and FEN import/export."""

import pytest

from chessgame.core.enums import CastlingRights, Color, MoveKind, PieceType
from chessgame.core.move import Move
from chessgame.core.notation import (
    STARTING_FEN,
    format_history,
    move_to_text,
    position_from_fen,
    position_to_fen,
)
from chessgame.core.piece import Piece
from chessgame.core.types import Position

sq = Position.parse

WP = Piece(Color.WHITE, PieceType.PAWN)
BP = Piece(Color.BLACK, PieceType.PAWN)
WN = Piece(Color.WHITE, PieceType.KNIGHT)
BK = Piece(Color.BLACK, PieceType.KING)


class TestMoveText:
    def test_pawn_push(self) -> None:
        assert move_to_text(Move(sq("e2"), sq("e4"), WP)) == "e2-e4"

    def test_piece_move(self) -> None:
        assert move_to_text(Move(sq("g1"), sq("f3"), WN)) == "Ng1-f3"

    def test_capture(self) -> None:
        assert move_to_text(Move(sq("e4"), sq("d5"), WP, BP)) == "e4xd5"

    def test_en_passant(self) -> None:
        move = Move(sq("e5"), sq("d6"), WP, BP, kind=MoveKind.EN_PASSANT)
        assert move_to_text(move) == "e5xd6 e.p."

    def test_promotion(self) -> None:
        move = Move(sq("e7"), sq("e8"), WP, kind=MoveKind.PROMOTION)
        assert move_to_text(move.with_promotion(PieceType.QUEEN)) == "e7-e8=Q"
        assert move_to_text(move.with_promotion(PieceType.KNIGHT)) == "e7-e8=N"

    def test_castling(self) -> None:
        short = Move(sq("e8"), sq("g8"), BK, kind=MoveKind.CASTLE_KINGSIDE)
        long = Move(sq("e8"), sq("c8"), BK, kind=MoveKind.CASTLE_QUEENSIDE)
        assert move_to_text(short) == "O-O"
        assert move_to_text(long) == "O-O-O"

    def test_check_and_mate_suffix(self) -> None:
        move = Move(sq("g1"), sq("f3"), WN)
        assert move_to_text(move, check=True) == "Ng1-f3+"
        assert move_to_text(move, check=True, mate=True) == "Ng1-f3#"


class TestFormatHistory:
    def test_empty(self) -> None:
        assert format_history([]) == ""

    def test_pairs_and_trailing_half_move(self) -> None:
        text = format_history(["e2-e4", "e7-e5", "Ng1-f3"])
        assert text == "1. e2-e4 e7-e5\n2. Ng1-f3"


class TestFen:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppp1ppp/8/8/3pP3/8/PPP2PPP/RNBQKBNR b Kq e3 0 1",
            "8/8/8/8/8/8/8/K6k b - - 0 1",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_fields_parsed(self) -> None:
        state = position_from_fen("rnbqkbnr/pppp1ppp/8/8/3pP3/8/PPP2PPP/RNBQKBNR b Kq e3 0 1")
        assert state.side_to_move == Color.BLACK
        assert state.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        assert state.en_passant == sq("e3")
        assert state.board.get(sq("d4")) == BP
        assert state.board.get(sq("e4")) == WP

    def test_counters_are_caller_supplied(self) -> None:
        state = position_from_fen(STARTING_FEN)
        assert position_to_fen(state, halfmove=3, fullmove=12).endswith(" w KQkq - 3 12")

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - -",
            "9/8/8/8/8/8/8/8 w - - 0 1",
            "8/8/8/8/8/8/8/7 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w Z - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - z9 0 1",
            "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
        ],
    )
    def test_invalid_input_raises(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/8/8/8/8/K3K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/8 w - - 0 1",
            "8/8/8/8/8/8/8/4K3 b - - 0 1",
            "k3k3/8/8/8/8/8/8/4K3 w - - 0 1",
        ],
    )
    def test_each_side_needs_exactly_one_king(self, fen: str) -> None:
        with pytest.raises(ValueError, match="king"):
            position_from_fen(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/3PP3/8/8/8/4K3 w - d6 0 1",  # own pawn behind the target
            "4k3/8/8/4P3/8/8/8/4K3 w - d6 0 1",  # no pawn at all
            "4k3/8/8/3pP3/8/8/8/4K3 w - d3 0 1",  # wrong rank for white to move
            "4k3/8/8/3pP3/8/8/8/4K3 b - d6 0 1",  # wrong rank for black to move
            "4k3/3p4/8/3pP3/8/8/8/4K3 w - d6 0 1",  # start square still occupied
        ],
    )
    def test_en_passant_field_must_match_a_double_step(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)

    def test_en_passant_field_for_black_to_move(self) -> None:
        state = position_from_fen("4k3/8/8/8/3pP3/8/8/4K3 b - e3 0 1")
        assert state.en_passant == sq("e3")
