"""
Extension point: implement BattleAgent to plug in any decision model.

Adding a new model requires only creating a new subclass here.
The transports (AgentPlayer, BattleStreamPlayer) never need to change.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from randbot.errors import UnavailableChoiceError, classify_host_error
from randbot.schema import Request

logger = logging.getLogger(__name__)


class BattleAgent(ABC):
    """Abstract decision engine.

    Receives a decoded Request, returns the choice string to send back
    (without the `/choose` prefix), or None when nothing must be sent.
    Knows nothing about the transport, pure game logic.
    """

    @abstractmethod
    def choose(self, request: Request) -> str | None:
        """Answer one request."""
        ...

    def receive_error(self, message: str) -> None:
        """Handle an `|error|` message from the simulator.

        An unavailable choice (e.g. we were trapped without knowing it) is
        followed by a new request, so it is only logged. Anything else is fatal.
        """
        error = classify_host_error(message)
        if isinstance(error, UnavailableChoiceError):
            logger.warning("[%s] %s — waiting for a new request.", self.name, message)
            return
        raise error

    @property
    def name(self) -> str:
        """Human-readable identifier used in logs and reports."""
        return self.__class__.__name__
