from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..errors import CommandError
from ..lib.services import probe_existing
from ..models import ExistingInstallationRecord

if TYPE_CHECKING:
    from ..context import InstallCtx

logger = logging.getLogger(__name__)


class ProbeExistingStep:
    step_id = "10_probe_existing"
    reaches = "probe_done"

    def run(self, ctx: "InstallCtx", state: Dict[str, Any]) -> Dict[str, Any]:
        target = ctx.target
        ctx.operator.say(f"[{target.display_name}] Checking for an existing installation...")

        try:
            record = probe_existing(
                target,
                runner=ctx.runner,
                timeout=ctx.cfg.timeout("probe"),
                dry_run=ctx.dry_run,
            )
        except CommandError as e:
            # A service manager we cannot query has nothing registered we could remove.
            logger.warning("Service query for %s failed, treating as absent: %s", target.service_name, e)
            record = ExistingInstallationRecord(present=False, detail="query failed")

        state["existing"] = record
        return state
