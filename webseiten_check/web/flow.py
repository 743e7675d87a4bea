"""
Three-step report flow: input -> email-gate -> results.

The flow is rebuilt from the submitted form on every request; the
serialized result travels in a hidden field, so nothing is kept server-side.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel

from webseiten_check.errors import CheckError, InvalidTransitionError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Ein Fehler ist aufgetreten"
INVALID_EMAIL_MESSAGE = "Bitte eine gültige E-Mail eingeben."


class Step(str, Enum):
    INPUT = "input"
    EMAIL_GATE = "email-gate"
    RESULTS = "results"


@dataclass
class ReportFlow:
    step: Step = Step.INPUT
    result: Optional[BaseModel] = None
    error: str = ""
    email: str = ""

    def _require(self, step: Step) -> None:
        if self.step is not step:
            raise InvalidTransitionError(f"Action requires step '{step.value}', flow is at '{self.step.value}'")

    async def analyze(self, run: Callable[[], Awaitable[BaseModel]]) -> bool:
        """
        Run the analysis; only a successful result moves on to the email gate.

        Returns:
            True when the flow advanced
        """
        self._require(Step.INPUT)
        self.error = ""
        self.result = None

        try:
            result = await run()
        except CheckError as e:
            self.error = e.message
            return False
        except Exception as e:
            logger.error(f"❌ Analysis crashed: {str(e)}", exc_info=True)
            self.error = GENERIC_ERROR_MESSAGE
            return False

        self.result = result
        self.step = Step.EMAIL_GATE
        return True

    async def unlock(self, email: str, forward: Callable[[str], Awaitable[object]]) -> bool:
        """
        Capture the email and show the results.

        The lead is forwarded once; its outcome never blocks the visitor.

        Returns:
            True when the flow advanced
        """
        self._require(Step.EMAIL_GATE)
        email = (email or "").strip()
        if "@" not in email:
            self.error = INVALID_EMAIL_MESSAGE
            return False

        self.email = email
        self.error = ""
        try:
            await forward(email)
        except Exception as e:
            logger.error(f"❌ Lead forwarding failed for {email}: {str(e)}", exc_info=True)

        self.step = Step.RESULTS
        return True

    def reset(self) -> None:
        self.step = Step.INPUT
        self.result = None
        self.error = ""
        self.email = ""
