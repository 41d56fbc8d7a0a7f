from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Sequence

from .context import mark_step_completed, new_state, record_decision, record_transition
from .errors import InstallerError, UserCancelledError
from .lib.tempfiles import scoped_artifact
from .models import InstallationOutcome
from .steps import (
    ConfirmUninstallStep,
    FetchArtifactStep,
    ProbeExistingStep,
    RegisterServiceStep,
    SilentInstallStep,
)

if TYPE_CHECKING:
    from .context import InstallCtx

logger = logging.getLogger(__name__)


class Step(Protocol):
    """One stage of a target's install sequence.

    ``reaches`` names the orchestration state entered when run() returns.
    """

    step_id: str
    reaches: str

    def run(self, ctx: "InstallCtx", state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    outcome: InstallationOutcome
    state: Dict[str, Any]
    ran_steps: List[str]


def build_steps() -> List[Step]:
    return [
        ProbeExistingStep(),
        ConfirmUninstallStep(),
        FetchArtifactStep(),
        SilentInstallStep(),
        RegisterServiceStep(),
    ]


def run_target(ctx: "InstallCtx", *, steps: Optional[Sequence[Step]] = None) -> PipelineResult:
    """Run the install sequence for ctx.target.

    Every failure, including Ctrl+C, is turned into an outcome here. The
    temporary artifact is removed on every path.
    """

    target = ctx.target
    state = new_state(target)
    ran: List[str] = []
    sequence = list(steps) if steps is not None else build_steps()

    record_transition(state, "start")
    try:
        with scoped_artifact(
            prefix=target.artifact_prefix,
            suffix=target.artifact_suffix,
            temp_dir=ctx.cfg.temp_dir,
        ) as artifact_path:
            state["artifact_path"] = str(artifact_path)
            for step in sequence:
                state["execution"]["current_step"] = step.step_id
                logger.info("Running step %s for %s", step.step_id, target.key)
                state = step.run(ctx, state)
                mark_step_completed(state, step.step_id)
                record_transition(state, step.reaches)
                ran.append(step.step_id)
        record_transition(state, "cleaned_up")
    except UserCancelledError as e:
        logger.info("%s: %s", target.key, e.reason)
        record_transition(state, "cancelled")
        outcome = InstallationOutcome.skipped(e.reason, target=target.key)
    except KeyboardInterrupt:
        logger.warning("%s: interrupted by operator", target.key)
        record_transition(state, "cancelled")
        outcome = InstallationOutcome.skipped("installation interrupted by operator", target=target.key)
    except InstallerError as e:
        logger.error(
            "%s failed at %s: %s",
            target.key,
            state["execution"].get("current_step"),
            e,
        )
        record_transition(state, "aborted")
        outcome = InstallationOutcome.failed(e.reason, target=target.key)
    except Exception as e:
        logger.exception("Unexpected failure installing %s", target.key)
        record_transition(state, "aborted")
        outcome = InstallationOutcome.failed(str(e) or e.__class__.__name__, target=target.key)
    else:
        record_transition(state, "done")
        outcome = InstallationOutcome.success(target=target.key)
    finally:
        state["execution"]["current_step"] = None

    record_decision(state, "outcome", outcome.describe())
    logger.info("Outcome for %s: %s", target.key, outcome.describe())
    return PipelineResult(outcome=outcome, state=state, ran_steps=ran)
