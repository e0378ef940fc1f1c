"""Move choosers: collaborators that pick one move from the legal list.

The rules engine only enumerates moves; these classes decide which one a
computer opponent plays, and ``ChooserSession`` runs them off the main
thread.
"""

from rookery.chooser.base import ChoiceRequest, IMoveChooser, Transport
from rookery.chooser.prompted import PromptedMoveChooser, build_prompt
from rookery.chooser.qt_bridge import ChooserWorker
from rookery.chooser.random_chooser import RandomMoveChooser
from rookery.chooser.session import ChooserSession

__all__ = [
    "ChoiceRequest",
    "ChooserSession",
    "ChooserWorker",
    "IMoveChooser",
    "PromptedMoveChooser",
    "RandomMoveChooser",
    "Transport",
    "build_prompt",
]
