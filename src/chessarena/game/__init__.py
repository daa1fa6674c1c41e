"""Game management layer — rules backend and the auto-play controller.

Quick start::

    from chessarena.engine import RandomMoveSource
    from chessarena.game import ChessRules, ExhibitionController

    ctrl = ExhibitionController(
        rules=ChessRules(),
        white=RandomMoveSource("White"),
        black=RandomMoveSource("Black"),
    )
    ctrl.setup()
    ctrl.start()
"""

from chessarena.game.exhibition import ExhibitionController, ExhibitionEvents
from chessarena.game.interfaces import ExhibitionPhase, IRulesEngine, Side
from chessarena.game.rules import ChessRules

__all__ = [
    # Interfaces
    "ExhibitionPhase",
    "IRulesEngine",
    "Side",
    # Concrete
    "ChessRules",
    "ExhibitionController",
    "ExhibitionEvents",
]
