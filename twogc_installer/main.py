from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from . import __version__
from .config import InstallerConfig, load_config
from .console import Operator
from .context import Fetcher, InstallCtx, Runner
from .errors import ConfigError, InputValidationError, InvalidChoiceError
from .lib.command import run_cmd
from .lib.net import download
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .models import InstallationOutcome
from .pipeline import run_target
from .targets import resolve_target
from .validate import parse_choice, validate_token

logger = logging.getLogger(__name__)

TOKEN_ENV = "TWOGC_TOKEN"

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_USAGE = 2


def run(
    *,
    operator: Operator,
    cfg: Optional[InstallerConfig] = None,
    choice: Optional[str] = None,
    token: Optional[str] = None,
    runner: Runner = run_cmd,
    fetch: Fetcher = download,
) -> InstallationOutcome:
    """Collect operator input and install the chosen target.

    Raises InputValidationError for an empty token before anything else runs.
    Every other problem comes back as a skipped or failed outcome.
    """

    cfg = cfg or InstallerConfig()

    raw_choice = choice if choice is not None else operator.choose_target()
    raw_token = token if token is not None else operator.ask_token()

    valid_token = validate_token(raw_token)

    try:
        selected = parse_choice(raw_choice)
    except InvalidChoiceError as e:
        outcome = InstallationOutcome.skipped(e.reason)
        operator.say("Invalid choice. Exiting.")
        logger.info("Outcome: %s", outcome.describe())
        return outcome

    target = resolve_target(selected, cfg.target_overrides)
    logger.info(
        "Selected %s (strict_exit_codes=%s, dry_run=%s)",
        target.key,
        cfg.strict_exit_codes,
        cfg.dry_run,
    )

    ctx = InstallCtx(
        cfg=cfg,
        target=target,
        token=valid_token,
        operator=operator,
        runner=runner,
        fetch=fetch,
    )
    result = run_target(ctx)
    operator.report(result.outcome, target.display_name)
    return result.outcome


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="twogc-installer",
        description="Install and register the 2GC tunnel agent or bridge client.",
    )
    p.add_argument("--config", default=None, help="Path to installer config (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--choice", default=None, help="1 = tunnel agent, 2 = bridge client")
    p.add_argument("--token", default=None, help=f"Registration token (or set {TOKEN_ENV})")
    p.add_argument("--yes", action="store_true", help="Remove an existing installation without asking")
    p.add_argument("--dry-run", action="store_true", help="Log commands and downloads without running them")
    p.add_argument(
        "--lenient",
        action="store_true",
        help="Ignore installer/registration exit codes (legacy behaviour)",
    )
    p.add_argument("--temp-dir", default=None, help="Where to place the downloaded installer")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    p.add_argument("--no-pause", action="store_true", help="Do not wait for Enter before exiting")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def host_supported() -> bool:
    """The targets are Windows services installed with msiexec and sc.exe."""

    return os.name == "nt"


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        log_path=args.log,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error("Cannot load config: %s", e)
        return EXIT_USAGE

    cfg = cfg.with_overrides(
        dry_run=True if args.dry_run else None,
        strict_exit_codes=False if args.lenient else None,
        temp_dir=args.temp_dir,
    )

    operator = Operator(assume_yes=args.yes)

    if not host_supported() and not cfg.dry_run:
        logger.error("Unsupported host (os.name=%s); use --dry-run to rehearse", os.name)
        operator.say("This installer only runs on Windows. Exiting.")
        return EXIT_INVALID_INPUT

    token = args.token if args.token is not None else os.environ.get(TOKEN_ENV)
    pause = not args.no_pause and sys.stdin.isatty()

    try:
        run(operator=operator, cfg=cfg, choice=args.choice, token=token)
    except InputValidationError as e:
        logger.error("Aborting: %s", e)
        operator.say("Token not provided. Exiting.")
        return EXIT_INVALID_INPUT
    except ConfigError as e:
        logger.error("Invalid target configuration: %s", e)
        return EXIT_USAGE

    operator.say("Done!")
    if pause:
        operator.pause()
    return EXIT_OK
