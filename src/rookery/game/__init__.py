"""Game management layer — controller, players, state machine.

Quick start::

    from rookery.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
"""

from rookery.game.controller import GameController, GameEvents
from rookery.game.interfaces import GamePhase, IGameController, IPlayer
from rookery.game.player import ChoiceRequest, ChooserPlayer, HumanPlayer
from rookery.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "ChoiceRequest",
    "ChooserPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
]
