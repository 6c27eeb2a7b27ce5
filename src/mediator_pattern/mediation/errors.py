"""
Exceptions raised by mediators and colleagues.
"""

from typing import Any


class MediationError(Exception):
    """Base class for all mediation errors."""

    pass


class InvalidReference(MediationError):
    """Raised when a participant argument is missing or of the wrong kind."""

    pass


class DeliveryFailure(MediationError):
    """
    Raised when a colleague fails while receiving a distributed message.

    The original exception is available as __cause__. Deliveries that were
    scheduled after the failing recipient are not attempted.
    """

    def __init__(self, mediator: Any, recipient: Any, message: Any):
        self.mediator = mediator
        self.recipient = recipient
        self.message = message
        super().__init__(
            f"Mediator '{getattr(mediator, 'name', mediator)}' failed to deliver "
            f"to '{getattr(recipient, 'name', recipient)}'"
        )
