"""
Concrete colleague that prints what it receives.
"""

import logging
from typing import Any, Optional, TextIO

from mediator_pattern.mediation.base import Colleague, Mediator
from mediator_pattern.mediation.errors import InvalidReference

logger = logging.getLogger(__name__)


class ConcreteColleague(Colleague):
    """
    A named participant whose only observable behavior is the line
    "<name> received <message>" written for each delivery.
    """

    def __init__(self, name: str, stream: Optional[TextIO] = None):
        """
        Args:
            name: Display name for output.
            stream: Text stream for received lines. Defaults to stdout.
        """
        self._name = name
        self._stream = stream

    @property
    def name(self) -> str:
        return self._name

    def send(self, mediator: Mediator, message: Any) -> None:
        if mediator is None or not isinstance(mediator, Mediator):
            raise InvalidReference("invalid mediator reference")
        logger.debug(f"[{self._name}] sending via {getattr(mediator, 'name', mediator)!s}")
        mediator.distribute(self, message)

    def receive(self, message: Any) -> None:
        print(f"{self._name} received {message}", file=self._stream)

    def __repr__(self) -> str:
        return f"ConcreteColleague(name={self._name!r})"
