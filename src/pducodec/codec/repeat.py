"""Bounded repetition of parser read sequences.

A read sequence is called over and over until it signals a stop, reaches its
bound or fails. Failures inside the sequence end the loop quietly unless an
exact or minimum repetition count has not yet been met, which lets a run of
records of unknown length be parsed until the input is exhausted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import Field, model_validator

from ..exceptions import PduCodecError, RepeatConditionError
from ..types import Descriptor

if TYPE_CHECKING:
    from .parser import PduParser

logger = logging.getLogger(__name__)

Sequence = Callable[["PduParser"], Any]


class RepeatCondition(Descriptor):
    """How many times a read sequence must or may repeat.

    With no bounds set the sequence repeats until it returns None or fails.

    Attributes:
        times: Exact number of repetitions required
        min_times: Minimum number of repetitions required
        max_times: Maximum number of repetitions allowed
    """

    times: Optional[int] = Field(default=None, ge=0)
    min_times: Optional[int] = Field(default=None, ge=0)
    max_times: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> RepeatCondition:
        if self.times is not None and (self.min_times is not None or self.max_times is not None):
            raise ValueError("times cannot be combined with min_times or max_times")
        if (
            self.min_times is not None
            and self.max_times is not None
            and self.min_times > self.max_times
        ):
            raise ValueError(
                f"min_times {self.min_times} is greater than max_times {self.max_times}"
            )
        return self

    def reached(self, count: int) -> bool:
        """True once no further repetition is allowed."""
        if self.times is not None and count >= self.times:
            return True
        return self.max_times is not None and count >= self.max_times

    def satisfied(self, count: int) -> bool:
        """True if stopping after ``count`` repetitions meets the condition."""
        if self.times is not None and count < self.times:
            return False
        return self.min_times is None or count >= self.min_times

    def describe(self) -> str:
        if self.times is not None:
            return f"exactly {self.times}"
        if self.min_times is not None:
            return f"at least {self.min_times}"
        return "any number of"


def run_repeat(parser: PduParser, sequence: Sequence, condition: RepeatCondition) -> int:
    """Call ``sequence(parser)`` repeatedly under ``condition``.

    Args:
        parser: Parser the sequence reads from
        sequence: Performs one iteration of reads; returns None to stop
        condition: Repetition bounds

    Returns:
        Number of completed iterations

    Raises:
        RepeatConditionError: If a read fails before the exact or minimum count is met
    """
    count = 0

    while not condition.reached(count):
        try:
            result = sequence(parser)
        except PduCodecError as e:
            if not condition.satisfied(count):
                raise RepeatConditionError(
                    f"Repeat stopped after {count} iterations, expected "
                    f"{condition.describe()} ({e})",
                    parser.offset,
                ) from e
            logger.debug("Repeat ended after %d iterations: %s", count, e)
            return count

        if result is None:
            logger.debug("Repeat stopped by sequence after %d iterations", count)
            return count
        count += 1

    logger.debug("Repeat reached its bound after %d iterations", count)
    return count
