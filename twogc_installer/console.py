from __future__ import annotations

import logging
from typing import Callable, Optional

from .models import InstallationOutcome, OutcomeStatus

logger = logging.getLogger(__name__)

MENU = (
    "Choose what to register:",
    " 1 - Cloudflare tunnel (Zero Trust)",
    " 2 - CloudBridge Client",
)


class Operator:
    """Console interaction with the person running the installer.

    input_fn/output_fn default to the builtins so tests can script answers.
    """

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        assume_yes: bool = False,
    ) -> None:
        self._input = input_fn
        self._output = output_fn
        self.assume_yes = assume_yes

    def say(self, message: str = "") -> None:
        self._output(message)

    def ask(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError:
            logger.info("No input available for prompt %r", prompt)
            return ""

    def choose_target(self) -> str:
        for line in MENU:
            self.say(line)
        return self.ask("Enter a number (1/2): ")

    def ask_token(self) -> str:
        return self.ask("Enter your 2GC token: ")

    def confirm(self, question: str) -> bool:
        if self.assume_yes:
            self.say(f"{question} (y/n): y")
            return True
        answer = self.ask(f"{question} (y/n): ")
        return answer.strip().lower() == "y"

    def report(self, outcome: InstallationOutcome, display_name: Optional[str] = None) -> None:
        prefix = f"[{display_name}] " if display_name else ""
        if outcome.status is OutcomeStatus.SUCCESS:
            self.say(f"{prefix}Installation and registration complete!")
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.say(f"{prefix}Skipped: {outcome.reason}")
        else:
            self.say(f"{prefix}Failed: {outcome.reason}")

    def pause(self) -> None:
        self.ask("Press Enter to exit...")
