from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .config import InstallerConfig
from .console import Operator
from .lib.command import CmdResult, run_cmd
from .lib.net import download
from .targets import TargetDescriptor

Runner = Callable[..., CmdResult]
Fetcher = Callable[..., int]


@dataclass(frozen=True)
class InstallCtx:
    """Per-run collaborators shared by every step.

    runner and fetch default to the real subprocess and HTTP implementations;
    tests swap them for fakes.
    """

    cfg: InstallerConfig
    target: TargetDescriptor
    token: str
    operator: Operator
    runner: Runner = run_cmd
    fetch: Fetcher = download
    sleep: Optional[Callable[[float], None]] = None

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run

    @property
    def strict(self) -> bool:
        return self.cfg.strict_exit_codes


def new_state(target: TargetDescriptor) -> Dict[str, Any]:
    """Run-scoped state. Lives in memory only and is discarded after the run."""

    return {
        "target": target.key,
        "execution": {
            "current_step": None,
            "completed_steps": [],
            "trace": [],
            "decisions": {},
        },
    }


def record_transition(state: Dict[str, Any], name: str) -> None:
    state.setdefault("execution", {}).setdefault("trace", []).append(name)


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value
