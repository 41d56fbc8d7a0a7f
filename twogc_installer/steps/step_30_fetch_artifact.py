from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from ..errors import DownloadError
from ..models import DownloadArtifact

if TYPE_CHECKING:
    from ..context import InstallCtx

logger = logging.getLogger(__name__)


class FetchArtifactStep:
    step_id = "30_fetch_artifact"
    reaches = "downloaded"

    def run(self, ctx: "InstallCtx", state: Dict[str, Any]) -> Dict[str, Any]:
        target = ctx.target
        dest = str(state["artifact_path"])

        ctx.operator.say(f"[{target.display_name}] Downloading installer...")
        written = ctx.fetch(
            target.download_url,
            dest,
            timeout=ctx.cfg.timeout("download"),
            dry_run=ctx.dry_run,
        )

        # The transport can report success without leaving a file behind.
        if not ctx.dry_run and not Path(dest).is_file():
            raise DownloadError(f"Artifact not found after download: {dest}")
        if not ctx.dry_run and Path(dest).stat().st_size == 0:
            raise DownloadError(f"Downloaded artifact is empty: {dest}")

        state["artifact"] = DownloadArtifact(url=target.download_url, path=dest, bytes_written=written or 0)
        return state
