from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..context import record_decision
from ..errors import CommandError, UserCancelledError
from ..lib.services import uninstall_existing

if TYPE_CHECKING:
    from ..context import InstallCtx

logger = logging.getLogger(__name__)


class ConfirmUninstallStep:
    step_id = "20_confirm_uninstall"
    reaches = "confirmed_or_absent"

    def run(self, ctx: "InstallCtx", state: Dict[str, Any]) -> Dict[str, Any]:
        target = ctx.target
        record = state.get("existing")
        if record is None or not record.present:
            record_decision(state, "existing_installation", "absent")
            return state

        ctx.operator.say(f"[{target.display_name}] Already installed.")
        if not ctx.operator.confirm("Remove the existing service?"):
            record_decision(state, "existing_installation", "kept")
            ctx.operator.say(f"Cancelling {target.display_name} installation.")
            raise UserCancelledError()

        record_decision(state, "existing_installation", "removed")
        kwargs: Dict[str, Any] = {}
        if ctx.sleep is not None:
            kwargs["sleep"] = ctx.sleep
        try:
            uninstall_existing(
                record,
                runner=ctx.runner,
                timeout=ctx.cfg.timeout("uninstall"),
                settle_seconds=ctx.cfg.uninstall_settle_seconds,
                dry_run=ctx.dry_run,
                **kwargs,
            )
        except CommandError as e:
            logger.warning("Uninstall of %s could not run, continuing: %s", target.key, e)
        return state
