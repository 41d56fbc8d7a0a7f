from __future__ import annotations

import logging
from typing import Optional

from .errors import InputValidationError, InvalidChoiceError
from .models import InstallationChoice

logger = logging.getLogger(__name__)


def validate_token(raw: Optional[str]) -> str:
    """Return the registration token unchanged or raise InputValidationError if it is blank."""

    token = raw or ""
    if not token.strip():
        raise InputValidationError("Registration token is empty")
    return token


def parse_choice(raw: Optional[str]) -> InstallationChoice:
    value = (raw or "").strip()
    try:
        return InstallationChoice(value)
    except ValueError:
        logger.warning("Rejected installation choice %r", value)
        raise InvalidChoiceError(f"Unknown installation choice: {value!r}") from None
