"""Yes/no gate run before a destructive batch.

The gate reports an outcome and never terminates the process; callers
decide what a declined or failed confirmation means for them.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol

from core.logging_config import EventLogger, get_logger

_LOGGER = get_logger(__name__)
_YES_ANSWERS = ("", "y", "ye", "yes")
_NO_ANSWERS = ("n", "no")
INVALID_ANSWER_WARNING = "Must respond yes or no"


class ConfirmationResult(Enum):
    """Outcome of a confirmation request."""

    CONFIRMED = "confirmed"
    DECLINED = "declined"
    FAILED = "failed"


class ConfirmationGate(Protocol):
    """Capability asked to approve each destructive batch."""

    def confirm(self, message: str) -> ConfirmationResult: ...


class PromptConfirmationGate:
    """Interactive gate reading answers from a terminal-like input."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        logger: EventLogger | None = None,
    ) -> None:
        self._input_fn = input_fn
        self._output_fn = output_fn
        self._logger = logger or _LOGGER

    def confirm(self, message: str) -> ConfirmationResult:
        """Ask until a yes or no answer arrives; blank means yes.

        Args:
            message: Question describing the pending batch.

        Returns:
            CONFIRMED, DECLINED, or FAILED when the input channel breaks.
        """
        self._logger.info("confirmation_requested", message=message)
        while True:
            try:
                answer = self._input_fn(f"{message} (yes/no) [yes]: ")
            except (EOFError, KeyboardInterrupt, OSError) as error:
                self._logger.error("confirmation_failed", error=repr(error))
                return ConfirmationResult.FAILED
            normalized = answer.strip().lower()
            if normalized in _YES_ANSWERS:
                self._logger.info("confirmation_answered", result="confirmed")
                return ConfirmationResult.CONFIRMED
            if normalized in _NO_ANSWERS:
                self._logger.info("confirmation_answered", result="declined")
                return ConfirmationResult.DECLINED
            self._output_fn(INVALID_ANSWER_WARNING)


class AssumeYesGate:
    """Non-interactive gate that approves every batch."""

    def __init__(self, logger: EventLogger | None = None) -> None:
        self._logger = logger or _LOGGER

    def confirm(self, message: str) -> ConfirmationResult:
        self._logger.info("confirmation_assumed", message=message)
        return ConfirmationResult.CONFIRMED
