from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from ..models import ExistingInstallationRecord
from .command import CmdResult, run_cmd

if TYPE_CHECKING:
    from ..targets import TargetDescriptor

logger = logging.getLogger(__name__)

Runner = Callable[..., CmdResult]


def service_exists(
    name: str,
    *,
    runner: Runner = run_cmd,
    timeout: Optional[float] = None,
) -> bool:
    """Ask the service control manager whether a service is registered."""

    r = runner(["sc.exe", "query", name], check=False, timeout=timeout)
    return r.returncode == 0


def probe_existing(
    target: "TargetDescriptor",
    *,
    runner: Runner = run_cmd,
    timeout: Optional[float] = None,
    dry_run: bool = False,
) -> ExistingInstallationRecord:
    """Look for a prior installation of target. Read-only."""

    if dry_run:
        logger.info("Dry run: assuming no existing %s installation", target.display_name)
        return ExistingInstallationRecord(present=False, detail="dry run")

    if target.probe_kind == "service":
        present = service_exists(target.service_name, runner=runner, timeout=timeout)
        detail = f"service {target.service_name}"
    else:
        present = Path(target.binary_path).exists()
        detail = f"binary {target.binary_path}"

    logger.info("Probe %s: %s %s", target.key, detail, "present" if present else "absent")
    return ExistingInstallationRecord(
        present=present,
        uninstall_argv=target.uninstall_argv() if present else (),
        detail=detail,
    )


def uninstall_existing(
    record: ExistingInstallationRecord,
    *,
    runner: Runner = run_cmd,
    timeout: Optional[float] = None,
    settle_seconds: float = 0,
    sleep: Callable[[float], None] = time.sleep,
    dry_run: bool = False,
) -> CmdResult:
    """Run the uninstall command, then give the service manager time to settle."""

    r = runner(list(record.uninstall_argv), check=False, timeout=timeout, dry_run=dry_run)
    if r.returncode != 0:
        logger.warning("Uninstall exited with %s; continuing", r.returncode)
    if settle_seconds and not dry_run:
        sleep(settle_seconds)
    return r
