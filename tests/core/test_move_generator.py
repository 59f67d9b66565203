"""Move generator tests: perft counts plus targeted special-move cases.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.move import KingsideCastle, PieceMove, QueensideCastle
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import STARTING_FEN, board_from_fen
from rookery.core.types import A7, B8, D5, D6, E5, parse_square


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth* by walking successor boards."""
    if depth == 0:
        return 1
    successors = MoveGenerator(board).generate_successors()
    if depth == 1:
        return len(successors)
    return sum(perft(child, depth - 1) for _, child in successors)


# ── Perft ────────────────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 3) == 8_902


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 2) == 2_039


# En-passant pins and promotions
POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftEdgeCases:
    def test_pos3_depth_3(self) -> None:
        assert perft(board_from_fen(POS3), 3) == 2_812

    def test_pos4_depth_2(self) -> None:
        assert perft(board_from_fen(POS4), 2) == 264

    def test_pos5_depth_2(self) -> None:
        assert perft(board_from_fen(POS5), 2) == 1_486


# ── Special moves ────────────────────────────────────────────────────────────


class TestGenerationOrder:
    def test_initial_moves_start_with_pawns(self) -> None:
        moves = MoveGenerator(Board.initial()).generate_legal_moves()
        assert len(moves) == 20
        first_piece = Board.initial()[moves[0].piece_positions()[0]]
        last_piece = Board.initial()[moves[-1].piece_positions()[0]]
        assert first_piece is not None and first_piece.is_pawn
        assert last_piece is not None and last_piece.piece_type == PieceType.KNIGHT

    def test_generation_is_deterministic(self) -> None:
        board = board_from_fen(KIWIPETE)
        assert (
            MoveGenerator(board).generate_legal_moves()
            == MoveGenerator(board).generate_legal_moves()
        )


class TestCastling:
    def test_both_castles_available(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        moves = MoveGenerator(board).generate_legal_moves()
        assert KingsideCastle() in moves
        assert QueensideCastle() in moves

    def test_cannot_castle_out_of_check(self) -> None:
        board = board_from_fen("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1")
        moves = MoveGenerator(board).generate_legal_moves()
        assert KingsideCastle() not in moves
        assert QueensideCastle() not in moves

    def test_cannot_castle_through_attacked_square(self) -> None:
        # Black rook on f8 covers f1
        board = board_from_fen("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        gen = MoveGenerator(board)
        assert not gen.can_castle(Color.WHITE, kingside=True)
        assert gen.can_castle(Color.WHITE, kingside=False)

    def test_queenside_b_file_may_be_attacked(self) -> None:
        # Only the king's path matters; b1 being attacked is fine
        board = board_from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert MoveGenerator(board).can_castle(Color.WHITE, kingside=False)

    def test_blocked_path(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/RN2K2R w KQ - 0 1")
        gen = MoveGenerator(board)
        assert not gen.can_castle(Color.WHITE, kingside=False)
        assert gen.can_castle(Color.WHITE, kingside=True)

    def test_needs_right(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
        assert not MoveGenerator(board).can_castle(Color.WHITE, kingside=True)


class TestEnPassant:
    def test_en_passant_generated(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        moves = MoveGenerator(board).generate_legal_moves()
        assert PieceMove(E5, D6) in moves

    def test_en_passant_expires(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 2")
        moves = MoveGenerator(board).generate_legal_moves()
        assert PieceMove(E5, D6) not in moves

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        # Capturing would clear the fifth rank between Ka5 and Rh5
        board = board_from_fen("7k/8/8/KPp4r/8/8/8/8 w - c6 0 2")
        moves = MoveGenerator(board).generate_legal_moves()
        assert PieceMove(parse_square("b5"), parse_square("c6")) not in moves


class TestPromotion:
    def test_four_promotions_in_order(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        promotions = [
            m
            for m in MoveGenerator(board).generate_legal_moves()
            if m.is_piece_move() and m.piece_positions() == (A7, parse_square("a8"))
        ]
        assert [m.promotion for m in promotions] == [
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        ]

    def test_capture_promotion(self) -> None:
        board = board_from_fen("1n2k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves = MoveGenerator(board).generate_legal_moves()
        assert PieceMove(A7, B8, PieceType.KNIGHT) in moves


class TestCheckDetection:
    def test_pinned_piece_cannot_move(self) -> None:
        board = board_from_fen("4r1k1/8/8/8/8/8/4N3/4K3 w - - 0 1")
        moves = MoveGenerator(board).generate_legal_moves()
        assert all(m.piece_positions()[0] != parse_square("e2") for m in moves)

    def test_is_in_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert MoveGenerator(board).is_in_check(Color.WHITE)
        assert not MoveGenerator(board).is_in_check(Color.BLACK)

    def test_no_king_is_never_in_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/7r w - - 0 1")
        assert not MoveGenerator(board).is_in_check(Color.WHITE)

    def test_square_attacked_by_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/3p4/8/8/8/4K3 w - - 0 1")
        gen = MoveGenerator(board)
        assert gen.is_square_attacked(parse_square("e4"), Color.BLACK)
        assert gen.is_square_attacked(parse_square("c4"), Color.BLACK)
        assert not gen.is_square_attacked(D5 - 8, Color.BLACK)

    def test_kings_keep_distance(self) -> None:
        board = board_from_fen("8/8/8/8/8/4k3/8/4K3 w - - 0 1")
        moves = MoveGenerator(board).generate_legal_moves()
        targets = {m.piece_positions()[1] for m in moves}
        assert targets == {parse_square("d1"), parse_square("f1")}
