"""
Abstract contracts for the two roles of the mediator pattern.

Colleagues never talk to each other directly. A colleague hands its message
to a Mediator, and the mediator decides who receives it.
"""

from abc import ABC, abstractmethod
from typing import Any


class Colleague(ABC):
    """
    A participant that communicates only through mediators.

    Subclasses must implement:
        - name -> str
        - send(mediator, message)
        - receive(message)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name used in observable output."""
        ...

    @abstractmethod
    def send(self, mediator: "Mediator", message: Any) -> None:
        """
        Send a message to the other members of a mediator.

        Args:
            mediator: The mediator that routes this message.
            message: Opaque message value, passed through unchanged.
        """
        ...

    @abstractmethod
    def receive(self, message: Any) -> None:
        """Handle a message distributed by a mediator."""
        ...


class Mediator(ABC):
    """
    A coordinator that owns a membership collection and distributes
    messages from one member to the others.

    Subclasses must implement:
        - register(colleague)
        - distribute(sender, message)
    """

    @abstractmethod
    def register(self, colleague: Colleague) -> None:
        """Add a colleague to this mediator's membership."""
        ...

    @abstractmethod
    def distribute(self, sender: Colleague, message: Any) -> None:
        """
        Deliver a message to every registered colleague except the sender.

        Args:
            sender: The originating colleague.
            message: Opaque message value, passed through unchanged.
        """
        ...
