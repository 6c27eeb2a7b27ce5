"""
ScenarioRunner: wires colleagues and mediators from a scenario config
and plays back its sends.

The runner owns the participants it builds. Mediators and colleagues know
nothing about scenarios; they are constructed, registered, and driven
exactly as any other caller would.
"""

import logging
from typing import Any, Dict, Optional, TextIO

from mediator_pattern.core.config import (
    ConfigError,
    MediatorConfig,
    ScenarioConfig,
    SendConfig,
    load_scenario_config,
)
from mediator_pattern.mediation.colleague import ConcreteColleague
from mediator_pattern.mediation.mediator import ConcreteMediator
from mediator_pattern.observability.event_logger import EventLogger, EventType

logger = logging.getLogger(__name__)


def default_scenario() -> ScenarioConfig:
    """
    The canonical two-mediator scenario.

    ColleagueA, B and C share mediator1; B and D share mediator2. A sends
    through mediator1, then B sends through mediator2.
    """
    return ScenarioConfig(
        name="two-mediators",
        colleagues=["ColleagueA", "ColleagueB", "ColleagueC", "ColleagueD"],
        mediators=[
            MediatorConfig(name="mediator1", members=["ColleagueA", "ColleagueB", "ColleagueC"]),
            MediatorConfig(name="mediator2", members=["ColleagueB", "ColleagueD"]),
        ],
        sends=[
            SendConfig(sender="ColleagueA", mediator="mediator1", message="MessageX from ColleagueA"),
            SendConfig(sender="ColleagueB", mediator="mediator2", message="MessageY from ColleagueB"),
        ],
    )


class ScenarioRunner:
    """
    Builds participants from a ScenarioConfig and runs its sends in order.
    """

    def __init__(
        self,
        config: ScenarioConfig,
        output_dir: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the ScenarioRunner.

        Args:
            config: The scenario configuration.
            output_dir: Override the events output directory. When neither
                this nor config.output.events_dir is set, events stay in memory.
            stream: Text stream colleagues print to. Defaults to stdout.
        """
        self.config = config
        self.output_dir = output_dir or config.output.events_dir
        self._stream = stream
        self.colleagues: Dict[str, ConcreteColleague] = {}
        self.mediators: Dict[str, ConcreteMediator] = {}
        self.event_logger = EventLogger(run_id=config.name, output_dir=self.output_dir)
        self._built = False

    @classmethod
    def from_config_file(cls, path: str, **kwargs: Any) -> "ScenarioRunner":
        """
        Create a ScenarioRunner from a YAML scenario file.

        Args:
            path: Path to the scenario YAML.
            **kwargs: Additional arguments passed to __init__.

        Returns:
            Configured ScenarioRunner instance.
        """
        config = load_scenario_config(path)
        return cls(config, **kwargs)

    def build(self) -> None:
        """
        Construct colleagues and mediators and register members.

        Nothing is constructed or registered unless the whole config is
        consistent, so a failed build leaves the runner empty.

        Raises:
            ConfigError: On duplicate names, or members and sends that refer
                to unknown colleagues or mediators.
        """
        if self._built:
            return

        self._validate()

        colleagues = {
            name: ConcreteColleague(name, stream=self._stream)
            for name in self.config.colleagues
        }
        mediators: Dict[str, ConcreteMediator] = {}
        for mediator_config in self.config.mediators:
            mediator = ConcreteMediator.from_config(mediator_config, event_logger=self.event_logger)
            for member in mediator_config.members:
                mediator.register(colleagues[member])
            mediators[mediator.name] = mediator

        self.colleagues = colleagues
        self.mediators = mediators
        self._built = True
        logger.info(
            f"Built scenario '{self.config.name}': {len(self.colleagues)} colleague(s), "
            f"{len(self.mediators)} mediator(s)"
        )

    def _validate(self) -> None:
        """Check names and every reference in the config."""
        colleague_names = set()
        for name in self.config.colleagues:
            if name in colleague_names:
                raise ConfigError(f"Duplicate colleague name: {name}")
            colleague_names.add(name)

        mediator_names = set()
        for mediator_config in self.config.mediators:
            if mediator_config.name in mediator_names:
                raise ConfigError(f"Duplicate mediator name: {mediator_config.name}")
            mediator_names.add(mediator_config.name)
            for member in mediator_config.members:
                if member not in colleague_names:
                    raise ConfigError(
                        f"Unknown colleague '{member}' in mediator '{mediator_config.name}'. "
                        f"Available: {sorted(colleague_names)}"
                    )

        for send in self.config.sends:
            if send.sender not in colleague_names:
                raise ConfigError(
                    f"Unknown colleague '{send.sender}'. Available: {sorted(colleague_names)}"
                )
            if send.mediator not in mediator_names:
                raise ConfigError(
                    f"Unknown mediator '{send.mediator}'. Available: {sorted(mediator_names)}"
                )

    def run(self) -> Dict[str, Any]:
        """
        Execute every send in order.

        Delivery failures propagate as DeliveryFailure and stop the run.

        Returns:
            Summary dict with scenario name, send and delivery totals,
            per-colleague delivery counts and the events file path.
        """
        self.build()

        plan = [
            (self.colleagues[send.sender], self.mediators[send.mediator], send.message)
            for send in self.config.sends
        ]

        for sender, mediator, message in plan:
            logger.info(f"{sender.name} -> {mediator.name}: {message}")
            sender.send(mediator, message)

        return self.get_summary()

    def get_summary(self) -> Dict[str, Any]:
        """Summarize what has been delivered so far."""
        counts = self.event_logger.get_delivery_counts()
        events_path = self.event_logger.events_path
        return {
            "scenario": self.config.name,
            "sends": len(self.event_logger.get_events(event_type=EventType.DISTRIBUTE_START)),
            "deliveries": sum(counts.values()),
            "delivery_counts": counts,
            "events_path": str(events_path) if events_path else None,
        }
