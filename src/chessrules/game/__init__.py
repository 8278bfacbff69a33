"""Game layer — the public facade, its options and its state record.

Quick start::

    from chessrules.game import Game

    game = Game()
    game.make_move("f2", "f3")
    game.make_move("e7", "e5")
    game.make_move("g2", "g4")
    game.make_move("d8", "h4")
    game.get_game_state()   # checkmate(white)
"""

from chessrules.game.config import GameConfig
from chessrules.game.game import Game, MoveRecord
from chessrules.game.serialization import dumps, game_from_dict, game_to_dict, loads

__all__ = [
    "Game",
    "GameConfig",
    "MoveRecord",
    "dumps",
    "game_from_dict",
    "game_to_dict",
    "loads",
]
