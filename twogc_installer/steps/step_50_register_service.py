from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..errors import CommandError, RegistrationError
from ..models import CallResult

if TYPE_CHECKING:
    from ..context import InstallCtx

logger = logging.getLogger(__name__)


class RegisterServiceStep:
    step_id = "50_register_service"
    reaches = "registered"

    def run(self, ctx: "InstallCtx", state: Dict[str, Any]) -> Dict[str, Any]:
        target = ctx.target
        if not ctx.token:
            raise RegistrationError("registration requires a token")

        ctx.operator.say(f"[{target.display_name}] Registering token...")
        try:
            cmd = ctx.runner(
                target.register_argv(ctx.token),
                check=False,
                timeout=ctx.cfg.timeout("register"),
                secrets=[ctx.token],
                dry_run=ctx.dry_run,
            )
        except CommandError as e:
            if ctx.strict:
                raise RegistrationError(f"registration could not run: {e}") from e
            logger.warning("Registration for %s could not run (lenient mode): %s", target.key, e)
            return state

        result = CallResult.from_cmd(cmd)
        state["register_result"] = result
        if not result.ok:
            if ctx.strict:
                raise RegistrationError(f"registration exited with code {result.returncode}")
            logger.warning(
                "Registration for %s exited with code %s; reporting success (lenient mode)",
                target.key,
                result.returncode,
            )
        return state
