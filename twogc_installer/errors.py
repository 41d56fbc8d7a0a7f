from __future__ import annotations

from typing import Optional, Sequence


class InstallerError(RuntimeError):
    """Base class for every failure the installer reports to the operator.

    ``outcome_reason`` is the short, stable text surfaced in the run outcome.
    Subclasses without a fixed reason report their message instead.
    """

    outcome_reason: Optional[str] = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.outcome_reason or self.__class__.__name__)

    @property
    def reason(self) -> str:
        return self.outcome_reason or str(self)


class InputValidationError(InstallerError):
    """Operator input is unusable; the whole run terminates."""


class InvalidChoiceError(InstallerError):
    outcome_reason = "invalid choice"


class UserCancelledError(InstallerError):
    outcome_reason = "installation cancelled by operator"


class DownloadError(InstallerError):
    outcome_reason = "download error"


class InstallExecutionError(InstallerError):
    pass


class RegistrationError(InstallerError):
    pass


class ConfigError(InstallerError):
    pass


class CommandError(InstallerError):
    """An external command could not be launched, timed out or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
