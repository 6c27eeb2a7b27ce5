"""
Concrete mediator with ordered membership and fail-fast distribution.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from mediator_pattern.core.config import ConfigError, MediatorConfig, MembershipMode
from mediator_pattern.mediation.base import Colleague, Mediator
from mediator_pattern.mediation.errors import (
    DeliveryFailure,
    InvalidReference,
    MediationError,
)

if TYPE_CHECKING:
    from mediator_pattern.observability.event_logger import EventLogger

logger = logging.getLogger(__name__)


class ConcreteMediator(Mediator):
    """
    Keeps colleagues in registration order and forwards each message to
    every member except the sender.

    In MULTISET mode a colleague registered twice receives each message
    twice. In SET mode repeated registration of the same object is ignored.
    Membership never shrinks.
    """

    def __init__(
        self,
        name: str = "mediator",
        membership: MembershipMode = MembershipMode.MULTISET,
        event_logger: Optional["EventLogger"] = None,
    ):
        self._name = name
        self.membership = MembershipMode(membership)
        self._colleagues: List[Colleague] = []
        self._lock = threading.Lock()
        self._event_logger = event_logger

    @property
    def name(self) -> str:
        return self._name

    @property
    def colleagues(self) -> Tuple[Colleague, ...]:
        """Snapshot of current membership in registration order."""
        with self._lock:
            return tuple(self._colleagues)

    def __len__(self) -> int:
        with self._lock:
            return len(self._colleagues)

    def __repr__(self) -> str:
        return f"ConcreteMediator(name={self._name!r}, members={len(self)})"

    def register(self, colleague: Colleague) -> None:
        if colleague is None or not isinstance(colleague, Colleague):
            raise InvalidReference("invalid colleague reference")

        with self._lock:
            if self.membership == MembershipMode.SET and any(
                c is colleague for c in self._colleagues
            ):
                logger.debug(f"[{self._name}] {colleague.name} already registered, ignoring")
                return
            self._colleagues.append(colleague)
            position = len(self._colleagues)

        logger.debug(f"[{self._name}] registered {colleague.name} at position {position}")
        self._log_event("register", colleague.name, {"position": position})

    def distribute(self, sender: Colleague, message: Any) -> None:
        if sender is None or not isinstance(sender, Colleague):
            raise InvalidReference("invalid sender reference")

        recipients = [c for c in self.colleagues if c is not sender]
        self._log_event("distribute_start", sender.name, {"recipients": len(recipients)})

        for recipient in recipients:
            try:
                recipient.receive(message)
            except MediationError:
                # Raised by a nested mediation inside receive(); already typed.
                raise
            except Exception as e:
                logger.error(
                    f"[{self._name}] delivery from {sender.name} to {recipient.name} failed: {e}"
                )
                self._log_event("error", recipient.name, {
                    "sender": sender.name,
                    "error": f"{type(e).__name__}: {e}",
                })
                raise DeliveryFailure(self, recipient, message) from e
            self._log_event("deliver", recipient.name, {"sender": sender.name})

        logger.debug(f"[{self._name}] {sender.name} delivered to {len(recipients)} colleague(s)")
        self._log_event("distribute_end", sender.name, {"delivered": len(recipients)})

    def _log_event(self, action: str, colleague: str, payload: Dict[str, Any]) -> None:
        """Log a mediation event if event_logger is configured."""
        if self._event_logger is None:
            return

        self._event_logger.record(action, self._name, colleague, payload)

    @classmethod
    def from_config(
        cls,
        config: Union[MediatorConfig, Dict[str, Any]],
        **kwargs: Any,
    ) -> "ConcreteMediator":
        """Factory method to create an empty ConcreteMediator from config."""
        if isinstance(config, dict):
            try:
                config = MediatorConfig(**config)
            except Exception as e:
                raise ConfigError(f"Invalid mediator config: {e}")
        return cls(name=config.name, membership=config.membership, **kwargs)
