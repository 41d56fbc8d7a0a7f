from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from ..errors import CommandError, InstallExecutionError
from ..models import CallResult

if TYPE_CHECKING:
    from ..context import InstallCtx

logger = logging.getLogger(__name__)


def _place_binary(src: str, dst: str, *, dry_run: bool) -> None:
    if dry_run:
        logger.info("Would copy %s -> %s", src, dst)
        return
    p = Path(dst)
    p.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, p)
    logger.info("Placed %s at %s", src, dst)


class SilentInstallStep:
    step_id = "40_silent_install"
    reaches = "installed"

    def run(self, ctx: "InstallCtx", state: Dict[str, Any]) -> Dict[str, Any]:
        target = ctx.target
        artifact = state["artifact"]

        ctx.operator.say(f"[{target.display_name}] Installing...")

        if target.installer_kind == "msi":
            try:
                cmd = ctx.runner(
                    target.install_argv(artifact.path),
                    check=False,
                    timeout=ctx.cfg.timeout("install"),
                    dry_run=ctx.dry_run,
                )
            except CommandError as e:
                raise InstallExecutionError(f"installer could not run: {e}") from e

            result = CallResult.from_cmd(cmd)
            state["install_result"] = result
            if not result.ok:
                if ctx.strict:
                    raise InstallExecutionError(f"installer exited with code {result.returncode}")
                logger.warning(
                    "Installer for %s exited with code %s; continuing (lenient mode)",
                    target.key,
                    result.returncode,
                )
        else:
            try:
                _place_binary(artifact.path, target.binary_path, dry_run=ctx.dry_run)
            except OSError as e:
                raise InstallExecutionError(f"could not place binary: {e}") from e

        if not ctx.dry_run and not Path(target.binary_path).exists():
            ctx.operator.say(f"{Path(target.binary_path).name} not found!")
            raise InstallExecutionError("binary missing post-install")

        return state
