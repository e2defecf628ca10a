"""Adapter around python-chess.

The coordinator never decides legality itself; it hands a `MoveRequest` to
`RulesEngine.try_apply_move` and gets back `Applied` or `Rejected`.
"""

from typing import Optional

import chess

from chessroom.exceptions import RulesEngineError
from .types import Applied, MoveOutcome, MoveRequest, Rejected, Side, TerminalReason


_PROMOTION_PIECES = {
    'q': chess.QUEEN,
    'r': chess.ROOK,
    'b': chess.BISHOP,
    'n': chess.KNIGHT,
}


class RulesEngine:
    def __init__(self, fen: Optional[str] = None) -> None:
        self.board = chess.Board()
        if fen:
            self.load_position(fen)

    def current_position(self) -> str:
        return self.board.fen()

    def load_position(self, fen: str) -> None:
        try:
            self.board = chess.Board(fen)
        except ValueError as exc:
            raise RulesEngineError(f"Cannot load position {fen!r}: {exc}") from exc

    def side_to_move(self) -> Side:
        return Side.FIRST if self.board.turn == chess.WHITE else Side.SECOND

    def try_apply_move(self, request: MoveRequest) -> MoveOutcome:
        try:
            from_square = chess.parse_square(request.from_square.strip().lower())
            to_square = chess.parse_square(request.to_square.strip().lower())
        except ValueError:
            return Rejected(f"unknown square in {request.from_square!r}-{request.to_square!r}")

        try:
            move = chess.Move(from_square, to_square, promotion=self._promotion_for(request, from_square, to_square))
            if move not in self.board.legal_moves:
                return Rejected(f"illegal move {move.uci()}")
            self.board.push(move)
            outcome = self.board.outcome(claim_draw=True)
        except Exception as exc:
            raise RulesEngineError(f"Rules engine failed applying {request!r}: {exc}") from exc

        if outcome is None:
            return Applied(position=self.board.fen())
        return Applied(
            position=self.board.fen(),
            is_terminal=True,
            terminal_reason=self._terminal_reason(outcome),
        )

    def _promotion_for(self, request: MoveRequest, from_square: int, to_square: int) -> Optional[int]:
        # Clients always attach a hint; it only matters for pawns reaching the last rank.
        if self.board.piece_type_at(from_square) != chess.PAWN:
            return None
        if chess.square_rank(to_square) not in (0, 7):
            return None
        hint = (request.promotion or 'q').strip().lower()
        return _PROMOTION_PIECES.get(hint[:1], chess.QUEEN)

    @staticmethod
    def _terminal_reason(outcome: chess.Outcome) -> TerminalReason:
        if outcome.termination == chess.Termination.CHECKMATE:
            return TerminalReason.CHECKMATE
        if outcome.termination == chess.Termination.STALEMATE:
            return TerminalReason.STALEMATE
        return TerminalReason.OTHER_DRAW
