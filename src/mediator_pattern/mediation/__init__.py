"""
Mediator pattern core: colleagues that talk to each other only
through mediators.
"""

from mediator_pattern.mediation.base import Colleague, Mediator
from mediator_pattern.mediation.colleague import ConcreteColleague
from mediator_pattern.mediation.errors import DeliveryFailure, InvalidReference, MediationError
from mediator_pattern.mediation.mediator import ConcreteMediator
