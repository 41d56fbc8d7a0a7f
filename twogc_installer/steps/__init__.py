from .step_10_probe_existing import ProbeExistingStep
from .step_20_confirm_uninstall import ConfirmUninstallStep
from .step_30_fetch_artifact import FetchArtifactStep
from .step_40_silent_install import SilentInstallStep
from .step_50_register_service import RegisterServiceStep

__all__ = [
    "ProbeExistingStep",
    "ConfirmUninstallStep",
    "FetchArtifactStep",
    "SilentInstallStep",
    "RegisterServiceStep",
]
