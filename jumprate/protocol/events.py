"""Construction notifications emitted by the rate model."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewInterestParams:
    """Per-step parameters a rate model was constructed with."""

    base_rate_per_step: int
    slope_per_step: int
    jump_slope_per_step: int
    kink: int


class RateModelObserver(ABC):
    """Receives the notification fired at the end of construction."""

    @abstractmethod
    def on_new_interest_params(self, event: NewInterestParams) -> None:
        """Handle a newly constructed model's parameters."""


class LoggingObserver(RateModelObserver):
    """Default observer: writes the parameters to the log."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def on_new_interest_params(self, event: NewInterestParams) -> None:
        logger.log(
            self.level,
            "NewInterestParams base_rate_per_step=%d slope_per_step=%d "
            "jump_slope_per_step=%d kink=%d",
            event.base_rate_per_step,
            event.slope_per_step,
            event.jump_slope_per_step,
            event.kink,
        )


@dataclass
class RecordingObserver(RateModelObserver):
    """Keeps every received event, in order."""

    events: list[NewInterestParams] = field(default_factory=list)

    def on_new_interest_params(self, event: NewInterestParams) -> None:
        self.events.append(event)
