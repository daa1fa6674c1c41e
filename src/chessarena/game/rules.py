"""Rules backend built on the ``chess`` library."""

from __future__ import annotations

import logging

import chess

from chessarena.game.interfaces import IRulesEngine, Side

_LOGGER = logging.getLogger(__name__)


class ChessRules(IRulesEngine):
    """Standard chess from the initial position (or a custom FEN)."""

    __slots__ = ("_board", "_start_fen")

    def __init__(self, fen: str | None = None) -> None:
        self._start_fen = fen or chess.STARTING_FEN
        self._board = chess.Board(self._start_fen)

    @property
    def fen(self) -> str:
        return self._board.fen()

    @property
    def side_to_move(self) -> Side:
        return Side.WHITE if self._board.turn == chess.WHITE else Side.BLACK

    @property
    def move_history(self) -> list[str]:
        return [move.uci() for move in self._board.move_stack]

    def apply(self, coord_move: str) -> bool:
        try:
            move = chess.Move.from_uci(coord_move.strip().lower())
        except ValueError:
            _LOGGER.warning("Unparsable move %r", coord_move)
            return False
        if move not in self._board.legal_moves:
            _LOGGER.warning("Illegal move %s in %s", coord_move, self.fen)
            return False
        self._board.push(move)
        return True

    def legal_move_count(self) -> int:
        return self._board.legal_moves.count()

    def is_game_over(self) -> bool:
        return self._board.is_game_over(claim_draw=True)

    def outcome_text(self) -> str | None:
        outcome = self._board.outcome(claim_draw=True)
        if outcome is None:
            return None
        if outcome.winner is not None:
            winner = Side.WHITE if outcome.winner == chess.WHITE else Side.BLACK
            return f"{winner} wins by checkmate!"
        reasons = {
            chess.Termination.STALEMATE: "Stalemate!",
            chess.Termination.INSUFFICIENT_MATERIAL: "Draw by insufficient material!",
            chess.Termination.THREEFOLD_REPETITION: "Draw by threefold repetition!",
            chess.Termination.FIVEFOLD_REPETITION: "Draw by fivefold repetition!",
            chess.Termination.FIFTY_MOVES: "Draw by fifty-move rule!",
            chess.Termination.SEVENTYFIVE_MOVES: "Draw by seventy-five-move rule!",
        }
        return reasons.get(outcome.termination, "Draw!")

    def reset(self) -> None:
        self._board = chess.Board(self._start_fen)
