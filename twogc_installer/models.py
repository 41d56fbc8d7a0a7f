from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .lib.command import CmdResult


class InstallationChoice(str, Enum):
    """Menu values the operator can pick from."""

    TUNNEL_AGENT = "1"
    BRIDGE_CLIENT = "2"


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallationOutcome:
    status: OutcomeStatus
    reason: str = ""
    target: Optional[str] = None

    @classmethod
    def success(cls, target: Optional[str] = None) -> "InstallationOutcome":
        return cls(status=OutcomeStatus.SUCCESS, target=target)

    @classmethod
    def skipped(cls, reason: str, target: Optional[str] = None) -> "InstallationOutcome":
        return cls(status=OutcomeStatus.SKIPPED, reason=reason, target=target)

    @classmethod
    def failed(cls, reason: str, target: Optional[str] = None) -> "InstallationOutcome":
        return cls(status=OutcomeStatus.FAILED, reason=reason, target=target)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def describe(self) -> str:
        label = self.status.value.capitalize()
        return f"{label}({self.reason})" if self.reason else label


@dataclass(frozen=True)
class ExistingInstallationRecord:
    present: bool
    uninstall_argv: Tuple[str, ...] = ()
    detail: str = ""


@dataclass(frozen=True)
class DownloadArtifact:
    url: str
    path: str
    bytes_written: int = 0


@dataclass(frozen=True)
class CallResult:
    """Ok/Err view of an external call (install or registration).

    ``error`` is None for Ok, otherwise a short error kind such as
    ``"nonzero_exit"``.
    """

    cmd: CmdResult
    error: Optional[str] = None

    @classmethod
    def from_cmd(cls, cmd: CmdResult) -> "CallResult":
        if cmd.returncode == 0:
            return cls(cmd=cmd)
        return cls(cmd=cmd, error="nonzero_exit")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def returncode(self) -> int:
        return self.cmd.returncode
