from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)

REDACTED = "***"


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def redact_argv(argv: Sequence[str], secrets: Sequence[str] = ()) -> list[str]:
    hidden = {s for s in secrets if s}
    return [REDACTED if a in hidden else a for a in argv]


def _fmt_argv(argv: Sequence[str], secrets: Sequence[str] = ()) -> str:
    return " ".join(shlex.quote(a) for a in redact_argv(argv, secrets))


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    timeout: float | None = None,
    secrets: Sequence[str] = (),
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command, with ``secrets`` replaced by ``***``.
    - Blocks until the process exits or ``timeout`` seconds elapse.
    - Launch failures and timeouts raise CommandError regardless of ``check``.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    shown = _fmt_argv(argv_list, secrets)
    logger.info("CMD %s", shown)

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {shown}", argv=argv_list) from e
    except OSError as e:
        raise CommandError(f"Command could not be started ({e}): {shown}", argv=argv_list) from e

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(
            f"Command failed ({p.returncode}): {shown}\n{p.stderr}",
            argv=argv_list,
            returncode=p.returncode,
        )

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)
